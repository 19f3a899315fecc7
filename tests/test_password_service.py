from datetime import datetime, timedelta

import pytest

from elnursery.auth.passwords import verify_password
from elnursery.models.principal import PrincipalType
from elnursery.utils.exceptions import (
    BadRequestError,
    InternalError,
    NotFoundError,
    NotificationError,
)

NEW_PASSWORD = "N3w!Passw"


def test_change_password(elnursery_app, make_user, db):
    user, password = make_user()

    result = elnursery_app.password_service.change_password(
        user.id, PrincipalType.USER, password, NEW_PASSWORD
    )

    assert result == {"message": "Password changed successfully"}
    doc = db["users"].find_one({"email": user.email})
    assert verify_password(NEW_PASSWORD, doc["password"])
    assert doc["change_password"] is True


def test_change_password_wrong_old_password(elnursery_app, make_admin, db):
    admin, password = make_admin()
    with pytest.raises(BadRequestError) as exc:
        elnursery_app.password_service.change_password(
            admin.id, PrincipalType.ADMIN, "wrong", NEW_PASSWORD
        )
    assert exc.value.message == "Old password is incorrect"
    assert verify_password(password, db["admins"].find_one()["password"])


def test_reset_password_stores_code_and_emails_it(elnursery_app, make_user, email_service, db):
    user, _ = make_user()

    result = elnursery_app.password_service.reset_password(user.email, PrincipalType.USER)

    assert result == {"message": "Password reset email sent successfully"}
    doc = db["users"].find_one({"email": user.email})
    code = doc["forget_password_token"]
    assert 100000 <= code <= 999999
    assert doc["forget_password_token_expiry"] > datetime.utcnow() + timedelta(minutes=55)
    email_service.send_reset_code.assert_called_once_with(user.email, user.name, code)


def test_reset_password_unknown_email(elnursery_app):
    with pytest.raises(NotFoundError):
        elnursery_app.password_service.reset_password("nobody@example.com", PrincipalType.ADMIN)


def test_reset_password_email_failure_stores_nothing(elnursery_app, make_user, email_service, db):
    user, _ = make_user()
    email_service.send_reset_code.side_effect = NotificationError("down")

    with pytest.raises(InternalError) as exc:
        elnursery_app.password_service.reset_password(user.email, PrincipalType.USER)

    assert exc.value.message == "Couldn't reset password"
    assert db["users"].find_one({"email": user.email})["forget_password_token"] is None


def _request_code(elnursery_app, db, email):
    elnursery_app.password_service.reset_password(email, PrincipalType.USER)
    return db["users"].find_one({"email": email})["forget_password_token"]


def test_change_by_token(elnursery_app, make_user, db):
    user, _ = make_user()
    code = _request_code(elnursery_app, db, user.email)

    elnursery_app.password_service.change_password_by_token(
        user.email, code, NEW_PASSWORD, PrincipalType.USER
    )

    doc = db["users"].find_one({"email": user.email})
    assert verify_password(NEW_PASSWORD, doc["password"])
    assert doc["forget_password_token"] is None
    assert doc["forget_password_token_expiry"] is None


def test_change_by_token_wrong_code(elnursery_app, make_user, db):
    user, password = make_user()
    code = _request_code(elnursery_app, db, user.email)
    wrong = 100000 if code != 100000 else 100001

    with pytest.raises(BadRequestError) as exc:
        elnursery_app.password_service.change_password_by_token(
            user.email, wrong, NEW_PASSWORD, PrincipalType.USER
        )

    assert exc.value.message == "Code is incorrect or expired"
    assert verify_password(password, db["users"].find_one({"email": user.email})["password"])


def test_change_by_token_expired_code(elnursery_app, make_user, db):
    user, password = make_user()
    code = _request_code(elnursery_app, db, user.email)
    db["users"].update_one(
        {"email": user.email},
        {"$set": {"forget_password_token_expiry": datetime.utcnow() - timedelta(seconds=1)}},
    )

    with pytest.raises(BadRequestError):
        elnursery_app.password_service.change_password_by_token(
            user.email, code, NEW_PASSWORD, PrincipalType.USER
        )
    assert verify_password(password, db["users"].find_one({"email": user.email})["password"])


def test_change_by_token_without_requested_code(elnursery_app, make_user):
    user, _ = make_user()
    with pytest.raises(BadRequestError):
        elnursery_app.password_service.change_password_by_token(
            user.email, 123456, NEW_PASSWORD, PrincipalType.USER
        )
