"""CLI tests for crochet_hub.cli."""

from __future__ import annotations

import json
from collections.abc import Iterator
from unittest.mock import patch

import pytest

from crochet_hub.cli import main


@pytest.fixture(autouse=True)
def _no_logging_setup() -> Iterator[None]:
    with patch("crochet_hub.cli.configure_logging"):
        yield


@pytest.fixture
def run(runtime_settings, capsys):
    def _run(*argv: str) -> tuple[int, str, str]:
        code = main(list(argv), settings=runtime_settings)
        captured = capsys.readouterr()
        return code, captured.out, captured.err

    return _run


@pytest.fixture
def form_file(tmp_path, delivery_form):
    delivery_form.pop("easyPaisaPhone")
    path = tmp_path / "delivery.json"
    path.write_text(json.dumps(delivery_form))
    return path


class TestCartCommands:
    def test_add_list_remove(self, run) -> None:
        code, out, _ = run("cart", "add", "Bunny Amigurumi", "1500")
        assert code == 0
        item = json.loads(out)
        assert item["name"] == "Bunny Amigurumi"

        run("cart", "add", "Tulip Bouquet", "2000")
        code, out, _ = run("cart", "list")
        listing = json.loads(out)
        assert code == 0
        assert listing["count"] == 2
        assert listing["total"] == 3500.0

        code, out, _ = run("cart", "remove", str(item["id"]))
        assert code == 0
        assert "1 item(s) left" in out

    def test_remove_unknown_id(self, run) -> None:
        code, out, _ = run("cart", "remove", "99")

        assert code == 1
        assert "No cart item" in out

    def test_invalid_price_reports_error(self, run) -> None:
        code, _, err = run("cart", "add", "Hat", "-5")

        assert code == 1
        assert "Error:" in err


class TestDiscountAndDeliveryCommands:
    def test_quiz_score_awards_coupon(self, run) -> None:
        code, out, _ = run("discount", "set", "--quiz-score", "4")

        assert code == 0
        assert "10% OFF" in out
        assert "10% OFF" in run("discount", "show")[1]

    def test_set_token_directly(self, run) -> None:
        run("discount", "set", "--token", "10% OFF")
        run("discount", "set", "--token", "none")

        assert "Discount coupon: none" in run("discount", "show")[1]

    def test_delivery_set_and_show(self, run, form_file) -> None:
        code, out, _ = run("delivery", "set", "--file", str(form_file))
        assert code == 0
        assert "**** **** **** 1234" in out

        code, out, _ = run("delivery", "show")
        assert code == 0
        assert "Name: Ayesha Khan" in out

    def test_delivery_show_when_absent(self, run) -> None:
        assert run("delivery", "show")[0] == 1

    def test_delivery_form_must_be_mapping(self, run, tmp_path) -> None:
        bad = tmp_path / "form.yaml"
        bad.write_text("- not\n- a mapping\n")

        code, _, err = run("delivery", "set", "--file", str(bad))

        assert code == 1
        assert "mapping" in err


class TestCheckoutCommand:
    def test_full_checkout_flow(self, run, form_file) -> None:
        run("cart", "add", "Bunny Amigurumi", "1500")
        run("cart", "add", "Tulip Bouquet", "2000")
        run("discount", "set", "--quiz-score", "5")
        run("delivery", "set", "--file", str(form_file))

        code, out, _ = run("checkout")

        assert code == 0
        assert "Thank you, Ayesha Khan!" in out
        order = json.loads(out[out.index("{") :])
        assert order["finalTotal"] == 3150.0

        orders = json.loads(run("orders")[1])
        assert [entry["orderId"] for entry in orders] == [order["orderId"]]
        assert json.loads(run("cart", "list")[1])["count"] == 0

        code, out, _ = run("orders", "--id", order["orderId"])
        assert code == 0
        assert json.loads(out)["discountLabel"] == "10%"

    def test_empty_cart(self, run) -> None:
        code, out, _ = run("checkout")

        assert code == 1
        assert "Your cart is empty!" in out

    def test_missing_delivery(self, run) -> None:
        run("cart", "add", "Hat", "900")

        code, out, _ = run("checkout")

        assert code == 1
        assert "Please add delivery details first!" in out
        assert "Next: delivery" in out


class TestStatusAndReviews:
    def test_status_reports_counts_and_issues(self, run, runtime_settings) -> None:
        runtime_settings.store_path.parent.mkdir(parents=True)
        runtime_settings.store_path.write_text(json.dumps({"cart": "{broken", "gallery": '["a"]'}))

        code, out, _ = run("status")

        report = json.loads(out)
        assert code == 0
        assert report["cart_items"] == 0
        assert report["gallery_images"] == 1
        assert report["recovery_issues"][0]["key"] == "cart"

    def test_review_add_and_list(self, run) -> None:
        assert run("review", "add", "--name", "Sana", "--text", "Lovely", "--rating", "4")[0] == 0

        reviews = json.loads(run("review", "list")[1])

        assert reviews == [{"name": "Sana", "text": "Lovely", "rating": 4}]

    def test_review_rating_out_of_range(self, run) -> None:
        code, _, err = run("review", "add", "--name", "Sana", "--text", "Lovely", "--rating", "9")

        assert code == 1
        assert "Rating" in err

    def test_subcommand_is_required(self) -> None:
        with pytest.raises(SystemExit):
            main([])
