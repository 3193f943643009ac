import json
from datetime import datetime, timedelta, timezone
from invitely.core import auth


def test_logout_revokes_token_until_expiry():
    token = auth.create_session(1, "sari", "user_customer")
    assert auth.verify_session(token)["username"] == "sari"

    auth.delete_session(token)

    assert auth.verify_session(token) is None
    assert token in auth._revoked


def test_revoked_tokens_pruned_after_expiry():
    token = auth.create_session(2, "budi", "user_customer")
    auth.delete_session(token)

    auth._prune_revoked(datetime.now(timezone.utc) + timedelta(hours=auth.SESSION_MAX_AGE_HOURS, minutes=1))

    assert token not in auth._revoked


def test_expired_token_not_kept_on_logout():
    session_json = json.dumps({
        "user_id": 3,
        "username": "old",
        "role": "user_customer",
        "created_at": (datetime.now(timezone.utc) - timedelta(hours=auth.SESSION_MAX_AGE_HOURS + 1)).isoformat(),
    }, sort_keys=True)
    token = f"{session_json}.{auth._sign(session_json)}"

    assert auth.verify_session(token) is None
    auth.delete_session(token)

    assert token not in auth._revoked


def test_tampered_token_rejected():
    token = auth.create_session(4, "dewi", "user_customer")
    session_json, signature = token.rsplit(".", 1)
    forged = session_json.replace('"user_id": 4', '"user_id": 1') + "." + signature

    assert auth.verify_session(forged) is None
