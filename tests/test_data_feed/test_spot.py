from __future__ import annotations

import pytest

from glass.core.errors import SchemaFailure
from glass.data_feed.spot import find_asset, normalize_asset, parse_markets_response


def test_normalize_asset_should_map_listing_fields() -> None:
    asset = normalize_asset(
        {"id": "bitcoin", "name": "Bitcoin", "symbol": "btc", "current_price": "64250.5", "price_change_percentage_24h": -1.5}
    )
    assert asset.id == "bitcoin"
    assert asset.symbol == "BTC"
    assert asset.price_usd == 64250.5
    assert asset.change_pct_24h == -1.5
    assert asset.is_rising is False


def test_normalize_asset_should_never_raise_on_garbage() -> None:
    asset = normalize_asset({"id": "x", "symbol": None, "current_price": -4, "price_change_percentage_24h": "n/a"})
    assert asset.price_usd == 0.0
    assert asset.change_pct_24h == 0.0
    assert asset.name == "x"

    empty = normalize_asset("not an object")
    assert empty.id == ""


def test_parse_markets_response_should_keep_order_and_drop_bad_ids(coin_markets_payload) -> None:
    payload = coin_markets_payload[:2] + [{"name": "No id"}, dict(coin_markets_payload[0])]
    assets = parse_markets_response(payload)
    assert [asset.id for asset in assets] == ["bitcoin", "ethereum"]


def test_parse_markets_response_should_accept_empty_and_null() -> None:
    assert parse_markets_response([]) == []
    assert parse_markets_response(None) == []


def test_parse_markets_response_should_reject_non_list() -> None:
    with pytest.raises(SchemaFailure) as excinfo:
        parse_markets_response({"error": "rate limited"})
    assert excinfo.value.source == "crypto"
    assert excinfo.value.kind == "schema"


def test_find_asset_should_lookup_by_id(coin_markets_payload) -> None:
    assets = parse_markets_response(coin_markets_payload)
    assert find_asset(assets, "solana").symbol == "SOL"
    assert find_asset(assets, "missing") is None
