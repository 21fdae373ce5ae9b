"""Tests for registering and logging in users"""
import pytest

from mission_app.db import Base
from mission_app.errors import InvalidInputError, StoreError
from tests.utils import user_count


class TestRegister:
    def test_register_assigns_sequential_ids(self, identity):
        first = identity.register("alice")
        second = identity.register("bob")

        assert first.created is True
        assert first.user.user_id == 1
        assert first.user.name == "alice"
        assert second.user.user_id == 2

    def test_register_same_name_twice_keeps_one_row(self, identity, session_factory):
        identity.register("alice")
        again = identity.register("alice")

        assert again.created is False
        assert again.user.user_id == 1
        assert user_count(session_factory) == 1

    def test_register_strips_whitespace(self, identity):
        identity.register("  alice ")
        assert identity.register("alice").created is False

    @pytest.mark.parametrize("name", ["", "   "])
    def test_register_rejects_blank_name(self, identity, session_factory, name):
        with pytest.raises(InvalidInputError):
            identity.register(name)
        assert user_count(session_factory) == 0

    def test_register_store_failure_raises_store_error(self, identity, engine):
        Base.metadata.drop_all(engine)
        with pytest.raises(StoreError) as exc_info:
            identity.register("alice")
        assert exc_info.value.__cause__ is not None


class TestAuthenticate:
    def test_known_user_returns_handle(self, identity, alice):
        user = identity.authenticate("alice")
        assert user is not None
        assert user.user_id == alice.user_id
        assert user.name == "alice"

    def test_unknown_user_returns_none(self, identity, alice):
        assert identity.authenticate("mallory") is None

    def test_blank_name_returns_none(self, identity, alice):
        assert identity.authenticate("") is None

    def test_store_failure_raises_store_error(self, identity, engine):
        Base.metadata.drop_all(engine)
        with pytest.raises(StoreError):
            identity.authenticate("alice")
