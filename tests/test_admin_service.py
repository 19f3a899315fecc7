import pytest

from elnursery.auth.passwords import verify_password
from elnursery.utils.exceptions import (
    BadRequestError,
    ConflictError,
    InternalError,
    NotFoundError,
    NotificationError,
)


def test_create_emails_password_matching_stored_hash(elnursery_app, make_admin):
    admin, password = make_admin()

    stored = elnursery_app.admin_store.find_by_id(admin.id)
    assert verify_password(password, stored.password)
    assert stored.change_password is False
    assert stored.roles == []

    public = admin.model_dump()
    assert "password" not in public
    assert "forget_password_token" not in public
    assert password not in str(public)


def test_notification_failure_leaves_no_admin(elnursery_app, email_service, db):
    email_service.send_account_credentials.side_effect = NotificationError("down")

    with pytest.raises(InternalError) as exc:
        elnursery_app.admin_service.create("Admin", "admin@example.com")

    assert exc.value.message == "An Error occurred while creating the admin"
    assert db["admins"].count_documents({"email": "admin@example.com"}) == 0


def test_duplicate_email_conflicts(elnursery_app, make_admin, db):
    make_admin()
    with pytest.raises(ConflictError) as exc:
        elnursery_app.admin_service.create("Other", "admin@example.com")

    assert exc.value.message == "Admin with this email already exist"
    assert db["admins"].count_documents({"email": "admin@example.com"}) == 1


def test_find_one_and_find_all(elnursery_app, make_admin):
    first, _ = make_admin("one@example.com")
    make_admin("two@example.com")

    assert elnursery_app.admin_service.find_one(first.id).email == "one@example.com"
    assert {a.email for a in elnursery_app.admin_service.find_all()} == {
        "one@example.com",
        "two@example.com",
    }


def test_find_one_missing_and_malformed_id(elnursery_app):
    with pytest.raises(NotFoundError):
        elnursery_app.admin_service.find_one("5f1d7f1c2a3b4c5d6e7f8a9b")
    with pytest.raises(NotFoundError) as exc:
        elnursery_app.admin_service.find_one("not-an-id")
    assert exc.value.message == "Admin not found"


def test_owner_cannot_be_removed(elnursery_app, make_admin, db):
    owner, _ = make_admin("owner@example.com", roles=["owner"])

    with pytest.raises(BadRequestError) as exc:
        elnursery_app.admin_service.remove(owner.id)

    assert exc.value.message == "You cannot delete the owner account"
    assert db["admins"].count_documents({}) == 1


def test_remove_admin(elnursery_app, make_admin):
    admin, _ = make_admin()
    result = elnursery_app.admin_service.remove(admin.id)
    assert result == {"message": "Successfully deleted admin from records"}
    with pytest.raises(NotFoundError):
        elnursery_app.admin_service.remove(admin.id)


def test_update_by_fields(elnursery_app, make_admin):
    make_admin()
    updated = elnursery_app.admin_service.update_by_fields(
        {"email": "admin@example.com"}, {"avatar": "https://cdn.example.com/a.png"}
    )
    assert updated.avatar == "https://cdn.example.com/a.png"
