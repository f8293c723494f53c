"""Tests for the configuration store, seed data and snapshot cache."""

from __future__ import annotations

import threading
from unittest.mock import MagicMock

from roofquote.data.cache import SnapshotCache
from roofquote.data.counties import is_hvhz_county, is_service_county, normalize_county
from roofquote.data.repository import InMemoryConfigurationStore
from roofquote.data.seed import (
    SEED_FINANCE_PLANS,
    build_seed_rate_card,
    seed_fixed_adders_cents,
    seed_price_per_square_cents,
)
from roofquote.models.enums import PitchTier, SystemType
from roofquote.models.rules import DEFAULT_COUNTY, RateCardKey


class TestSeedRateCard:
    def test_entry_count(self) -> None:
        assert len(build_seed_rate_card()) == 486

    def test_hvhz_counties_only_have_hvhz_rows(self) -> None:
        for entry in build_seed_rate_card():
            if entry.key.county in ("Miami-Dade", "Broward"):
                assert entry.key.hvhz

    def test_flat_systems_not_keyed_by_pitch(self) -> None:
        for entry in build_seed_rate_card():
            if entry.key.system_type.is_flat:
                assert entry.key.pitch_tier is None

    def test_miami_dade_shingle_price(self) -> None:
        assert seed_price_per_square_cents(SystemType.SHINGLE, "Miami-Dade", hvhz=True) == 59_513

    def test_default_county_base_prices(self) -> None:
        assert seed_price_per_square_cents(SystemType.METAL, DEFAULT_COUNTY, hvhz=False) == 85_000
        assert seed_price_per_square_cents(SystemType.METAL, DEFAULT_COUNTY, hvhz=True) == 102_000

    def test_fixed_adders(self) -> None:
        assert seed_fixed_adders_cents(59_513, 2) == {
            "permit": 1_190,
            "disposal": 55_000,
            "cleanup": 15_000,
        }

    def test_keys_are_unique(self) -> None:
        entries = build_seed_rate_card()
        assert len({entry.key for entry in entries}) == len(entries)


class TestInMemoryStore:
    def test_lookup_by_composite_key(self, store: InMemoryConfigurationStore) -> None:
        key = RateCardKey(
            county="Broward",
            system_type=SystemType.SHINGLE,
            pitch_tier=PitchTier.MEDIUM,
            story_tier=2,
            tear_off_layers=1,
            hvhz=True,
        )
        entry = store.get_rate_card_entry(key)
        assert entry is not None
        assert entry.key == key

    def test_missing_key_returns_none(self, store: InMemoryConfigurationStore) -> None:
        key = RateCardKey(county="Broward", system_type=SystemType.FLAT_BUR, hvhz=False)
        assert store.get_rate_card_entry(key) is None

    def test_active_plans(self, store: InMemoryConfigurationStore) -> None:
        assert store.list_active_finance_plans() == SEED_FINANCE_PLANS

    def test_writes_notify_listeners(self, store: InMemoryConfigurationStore) -> None:
        listener = MagicMock()
        store.add_change_listener(listener)

        store.upsert_rate_card_entry(build_seed_rate_card()[0])
        store.add_finance_plan(SEED_FINANCE_PLANS[0])
        store.set_financing_disclaimer(None)

        assert listener.call_count == 3

    def test_remove_entry(self, store: InMemoryConfigurationStore) -> None:
        entry = build_seed_rate_card()[0]
        store.remove_rate_card_entry(entry.key)
        assert store.get_rate_card_entry(entry.key) is None
        assert len(store) == 485


class TestCounties:
    def test_normalize_strips_suffix(self) -> None:
        assert normalize_county("Broward County") == "Broward"
        assert normalize_county(" Palm Beach ") == "Palm Beach"

    def test_hvhz(self) -> None:
        assert is_hvhz_county("Miami-Dade County")
        assert not is_hvhz_county("Palm Beach")

    def test_service_area(self) -> None:
        assert is_service_county("Palm Beach County")
        assert not is_service_county("Orange")


class TestSnapshotCache:
    def test_loads_once(self) -> None:
        cache: SnapshotCache[str, int] = SnapshotCache()
        loader = MagicMock(return_value=7)

        assert cache.get_or_load("a", loader) == 7
        assert cache.get_or_load("a", loader) == 7
        assert loader.call_count == 1
        assert len(cache) == 1

    def test_none_is_not_cached(self) -> None:
        cache: SnapshotCache[str, int] = SnapshotCache()
        loader = MagicMock(return_value=None)

        cache.get_or_load("a", loader)
        cache.get_or_load("a", loader)

        assert loader.call_count == 2
        assert len(cache) == 0

    def test_invalidate_clears_and_bumps_generation(self) -> None:
        cache: SnapshotCache[str, int] = SnapshotCache()
        cache.get_or_load("a", lambda: 1)
        generation = cache.generation

        cache.invalidate()

        assert len(cache) == 0
        assert cache.generation == generation + 1

    def test_load_racing_invalidate_is_discarded(self) -> None:
        cache: SnapshotCache[str, int] = SnapshotCache()

        def stale_loader() -> int:
            cache.invalidate()
            return 1

        assert cache.get_or_load("a", stale_loader) == 1
        assert len(cache) == 0

    def test_concurrent_readers(self) -> None:
        cache: SnapshotCache[int, int] = SnapshotCache()
        errors: list[BaseException] = []

        def work(offset: int) -> None:
            try:
                for i in range(200):
                    assert cache.get_or_load(i, lambda i=i: i * 2) == i * 2
                    if (i + offset) % 50 == 0:
                        cache.invalidate()
            except BaseException as exc:  # noqa: BLE001
                errors.append(exc)

        threads = [threading.Thread(target=work, args=(n,)) for n in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert errors == []
