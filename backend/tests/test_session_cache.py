from account_service.schemas.user import UserResponse


def _profile():
    return UserResponse(id=7, username="alice", nickname="Al", status=1)


def test_set_stores_json_under_prefixed_key_with_ttl(session_cache, fake_redis):
    session_cache.set("abc123", _profile())

    assert "user:token:abc123" in fake_redis.store
    assert fake_redis.ttl("user:token:abc123") == 30 * 60
    assert '"username":"alice"' in fake_redis.store["user:token:abc123"]


def test_get_returns_profile_until_expiry(session_cache, fake_redis):
    session_cache.set("abc123", _profile())

    cached = session_cache.get("abc123")
    assert cached == _profile()

    fake_redis.advance(30 * 60 - 1)
    assert session_cache.get("abc123") is not None

    fake_redis.advance(2)
    assert session_cache.get("abc123") is None


def test_delete_is_idempotent(session_cache):
    session_cache.set("abc123", _profile())

    assert session_cache.delete("abc123") is True
    assert session_cache.get("abc123") is None
    assert session_cache.delete("abc123") is False
    assert session_cache.delete("never-issued") is False
