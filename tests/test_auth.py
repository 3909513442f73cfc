"""Tests for firebase_rest.auth token providers."""

from types import SimpleNamespace

import pytest

from firebase_rest.auth import host_token_provider, no_token, static_token_provider


class _AsyncUser:
    async def get_id_token(self):
        return "async-token"


def _host(user):
    auth = SimpleNamespace(current_user=user)
    return SimpleNamespace(auth=lambda: auth)


class TestHostTokenProvider:
    @pytest.mark.asyncio
    async def test_sync_token(self):
        user = SimpleNamespace(get_id_token=lambda: "sync-token")
        assert await host_token_provider(_host(user))() == "sync-token"

    @pytest.mark.asyncio
    async def test_async_token(self):
        assert await host_token_provider(_host(_AsyncUser()))() == "async-token"

    @pytest.mark.asyncio
    async def test_signed_out(self):
        assert await host_token_provider(_host(None))() is None

    @pytest.mark.asyncio
    async def test_host_without_auth(self):
        assert await host_token_provider(SimpleNamespace())() is None

    @pytest.mark.asyncio
    async def test_empty_token_is_none(self):
        user = SimpleNamespace(get_id_token=lambda: "")
        assert await host_token_provider(_host(user))() is None

    @pytest.mark.asyncio
    async def test_reads_current_user_each_call(self):
        auth = SimpleNamespace(current_user=None)
        provider = host_token_provider(SimpleNamespace(auth=lambda: auth))

        assert await provider() is None
        auth.current_user = SimpleNamespace(get_id_token=lambda: "later")
        assert await provider() == "later"


class TestStaticProviders:
    @pytest.mark.asyncio
    async def test_static(self):
        assert await static_token_provider("svc")() == "svc"

    @pytest.mark.asyncio
    async def test_no_token(self):
        assert await no_token() is None
