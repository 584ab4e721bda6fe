"""
==============================================================================
Menu Service Tests
==============================================================================

State precedence (URL token → saved state → defaults) and admin edits that
persist through the key-value store.

==============================================================================
"""

import json

import pytest
from sqlalchemy.exc import SQLAlchemyError

from fimenu.catalog import ProductCatalog
from fimenu.codec import encode_token
from fimenu.config import Settings
from fimenu.core.exceptions import AppException
from fimenu.db import DatabaseManager, KeyValueStore, get_database_manager
from fimenu.services.menu_service import (
    AdminMenuService,
    MenuStateResolver,
    StateSource,
)


PRODUCTS_KEY = "fi_products_v1"
PACKAGES_KEY = "fi_packages_v1"

URL_PRODUCTS = [
    {"id": "a", "title": "From link", "price": 100},
    {"id": "b", "title": "Also from link", "price": 250},
]

SAVED_PRODUCTS = [
    {"id": "saved", "title": "Saved", "price": 42},
]


@pytest.fixture
def settings() -> Settings:
    return Settings(database_url="sqlite://")


@pytest.fixture
def resolver(store, settings) -> MenuStateResolver:
    return MenuStateResolver(store, settings)


@pytest.fixture
def service(store, settings) -> AdminMenuService:
    return AdminMenuService(store, settings)


class TestPrecedence:
    """Tests URL token over saved state over defaults."""

    def test_defaults_when_nothing_given(self, resolver):
        state = resolver.resolve()

        assert state.source == StateSource.DEFAULT
        assert state.catalog == ProductCatalog.default()
        assert state.selection == frozenset()

    def test_saved_state_over_defaults(self, resolver, store):
        store.set(PRODUCTS_KEY, json.dumps(SAVED_PRODUCTS))

        state = resolver.resolve()

        assert state.source == StateSource.STORAGE
        assert [p.id for p in state.catalog.products] == ["saved"]

    def test_url_over_saved_state(self, resolver, store):
        """Test a link catalog wins even when a different one is saved."""
        store.set(PRODUCTS_KEY, json.dumps(SAVED_PRODUCTS))

        state = resolver.resolve(encode_token(URL_PRODUCTS), encode_token(["a", "b", "c"]))

        assert state.source == StateSource.URL
        assert [p.id for p in state.catalog.products] == ["a", "b"]
        assert state.selection == {"a", "b", "c"}
        assert state.total == 350

    @pytest.mark.parametrize("token", [
        "garbage!!",
        encode_token([]),
        encode_token({"id": "a"}),
        encode_token("products"),
        encode_token(["not", "objects"]),
    ])
    def test_unusable_token_falls_back(self, resolver, store, token):
        """Test malformed, empty or non-list tokens count as absent."""
        store.set(PRODUCTS_KEY, json.dumps(SAVED_PRODUCTS))

        state = resolver.resolve(token)

        assert state.source == StateSource.STORAGE
        assert [p.id for p in state.catalog.products] == ["saved"]

    def test_corrupt_saved_state_ignored(self, resolver, store):
        store.set(PRODUCTS_KEY, "{not json")
        store.set(PACKAGES_KEY, "[broken")

        state = resolver.resolve()

        assert state.source == StateSource.DEFAULT
        assert state.catalog == ProductCatalog.default()

    def test_empty_saved_products_ignored(self, resolver, store):
        store.set(PRODUCTS_KEY, "[]")
        assert resolver.resolve().source == StateSource.DEFAULT

    def test_saved_empty_package_list_respected(self, resolver, store):
        store.set(PACKAGES_KEY, "[]")
        assert resolver.resolve().catalog.packages == []

    def test_packages_come_from_saved_state(self, resolver, store):
        store.set(PACKAGES_KEY, json.dumps([{"id": "mine", "productIds": ["a"]}]))

        state = resolver.resolve(encode_token(URL_PRODUCTS))

        assert [p.id for p in state.catalog.packages] == ["mine"]

    def test_url_products_normalized(self, resolver):
        token = encode_token([{"id": "a", "price": -1}, "junk", {"id": "a", "price": "7"}])

        products = resolver.resolve(token).catalog.products

        assert len(products) == 2
        assert products[0].price == 0
        assert products[1].price == 7
        assert products[1].id != "a"


class TestSelections:
    """Tests the selections token."""

    def test_selection_coerced_to_strings(self, resolver):
        state = resolver.resolve(selections_token=encode_token(["dent", 5, "dent", ""]))
        assert state.selection == {"dent", "5"}

    @pytest.mark.parametrize("token", [None, "", "###", encode_token({"dent": True})])
    def test_bad_selection_is_empty(self, resolver, token):
        assert resolver.resolve(selections_token=token).selection == frozenset()

    def test_dangling_selection_is_inert(self, resolver):
        state = resolver.resolve(selections_token=encode_token(["dent", "gone"]))
        assert state.total == 630

    def test_with_selection_keeps_catalog(self, resolver):
        state = resolver.resolve()
        updated = state.with_selection({"xpel"})

        assert updated.catalog is state.catalog
        assert updated.total == 2495
        assert state.selection == frozenset()


class TestTokenLimit:
    """Tests oversized tokens are ignored."""

    def test_long_token_ignored(self, store):
        resolver = MenuStateResolver(store, Settings(database_url="sqlite://", max_token_length=50))
        token = encode_token(URL_PRODUCTS)
        assert len(token) > 50

        assert resolver.resolve(token).source == StateSource.DEFAULT

    def test_token_within_limit(self, resolver):
        assert resolver.resolve(encode_token(URL_PRODUCTS)).source == StateSource.URL


class TestAdminMenuService:
    """Tests admin edits persist."""

    def test_load_defaults(self, service):
        assert service.load() == ProductCatalog.default()

    def test_edit_is_persisted(self, service, store, resolver):
        service.update_product("dent", {"price": 700})

        saved = json.loads(store.get(PRODUCTS_KEY))
        assert next(p for p in saved if p["id"] == "dent")["price"] == 700
        assert json.loads(store.get(PACKAGES_KEY))[0]["productIds"] == ["xpel", "surface", "dent"]

        state = resolver.resolve()
        assert state.source == StateSource.STORAGE
        assert state.catalog.find_by_id("dent").price == 700

    def test_edits_accumulate(self, service):
        service.add_product({"id": "fresh", "title": "Fresh"})
        service.delete_product("xpel")

        catalog = service.load()
        assert catalog.find_by_id("fresh") is not None
        assert catalog.find_by_id("xpel") is None

    def test_missing_product_not_saved(self, service, store):
        with pytest.raises(AppException):
            service.delete_product("gone")
        assert store.get(PRODUCTS_KEY) is None

    def test_reset_forgets_saved_products(self, service, store):
        service.delete_product("dent")
        service.delete_package("ownership")

        catalog = service.reset_products()

        assert store.get(PRODUCTS_KEY) is None
        assert catalog.find_by_id("dent") is not None
        assert service.load().find_package("ownership") is None

    def test_import_replaces_products(self, service):
        catalog = service.import_products(json.dumps([{"id": "only", "price": 10}]))

        assert [p.id for p in catalog.products] == ["only"]
        assert [p.id for p in service.load().products] == ["only"]

    def test_package_crud(self, service):
        service.add_package({"id": "combo", "name": "Combo", "productIds": ["dent"]})
        service.update_package("combo", {"discount": 20})

        package = service.load().find_package("combo")
        assert package.discount == 20
        assert package.name == "Combo"

        service.delete_package("combo")
        assert service.load().find_package("combo") is None


class TestKeyValueStore:
    """Tests the persisted key-value entries."""

    def test_set_get_delete(self, store):
        assert store.get("k") is None

        store.set("k", "[1]")
        store.set("k", "[2]")
        assert store.get("k") == "[2]"

        assert store.delete("k") is True
        assert store.delete("k") is False
        assert store.get("k") is None

    def test_failed_commit_rolled_back(self, store, db, monkeypatch):
        def broken_commit():
            raise SQLAlchemyError("disk full")

        monkeypatch.setattr(db, "commit", broken_commit)

        with pytest.raises(AppException) as exc_info:
            store.set("k", "[]")

        assert exc_info.value.code == "INTERNAL_ERROR"
        assert exc_info.value.status_code == 500
        assert store.get("k") is None

    def test_set_many(self, store):
        store.set("a", "old")

        store.set_many({"a": "[1]", "b": "[2]"})

        assert store.get("a") == "[1]"
        assert store.get("b") == "[2]"

    def test_failed_save_writes_neither_key(self, service, store, db, monkeypatch):
        """Test products and packages are saved together or not at all."""
        def broken_commit():
            raise SQLAlchemyError("disk full")

        monkeypatch.setattr(db, "commit", broken_commit)

        with pytest.raises(AppException):
            service.update_product("dent", {"price": 700})

        assert store.get(PRODUCTS_KEY) is None
        assert store.get(PACKAGES_KEY) is None


class TestDatabaseManager:
    """Tests the engine owner used at startup and by get_db."""

    def test_single_instance(self):
        assert get_database_manager() is DatabaseManager()

    def test_tables_and_connection(self):
        manager = get_database_manager()
        manager.create_tables()

        assert manager.verify_connection() is True

        session = manager.get_session()
        try:
            assert KeyValueStore(session).get(PRODUCTS_KEY) is None
        finally:
            session.close()
