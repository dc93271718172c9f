"""Application wiring."""

from crochet_hub.app.container import ApplicationContainer, StorefrontState

__all__ = ["ApplicationContainer", "StorefrontState"]
