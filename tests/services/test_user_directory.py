import pytest

from webgis.errors import AuthError, ConflictError, ValidationError
from webgis.models import UserRole, new_id
from webgis.services import UserDirectory
from webgis.services.users import check_password
from webgis.storage import USERS


@pytest.fixture()
def directory(memory_store) -> UserDirectory:
    return UserDirectory(memory_store, bcrypt_rounds=4)


@pytest.mark.asyncio
async def test_register_creates_member_with_hashed_password(directory, memory_store):
    user = await directory.register("  Mai Tran ", "  Mai@Example.COM ", "s3cret")

    assert user.id.startswith("U_")
    assert user.full_name == "Mai Tran"
    assert user.email == "mai@example.com"
    assert user.role == UserRole.MEMBER

    stored = (await memory_store.read(USERS))[0]
    assert "password" not in stored
    assert stored["passwordHash"] != "s3cret"
    assert check_password("s3cret", stored["passwordHash"])
    assert stored["fullName"] == "Mai Tran"
    assert stored["role"] == "member"
    assert "createdAt" in stored


@pytest.mark.asyncio
async def test_public_view_has_no_secret(directory):
    user = await directory.register("Mai", "mai@example.com", "s3cret")
    public = user.to_public()

    assert "password" not in public
    assert "passwordHash" not in public
    assert set(public) == {"id", "fullName", "email", "role", "createdAt"}


@pytest.mark.asyncio
async def test_register_rejects_email_differing_only_in_case(directory, memory_store):
    await directory.register("Mai", "mai@example.com", "s3cret")

    with pytest.raises(ConflictError) as exc_info:
        await directory.register("Other", "MAI@Example.com", "different")
    assert exc_info.value.message == "email_already_exists"
    assert len(await memory_store.read(USERS)) == 1


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "full_name,email,password",
    [
        ("", "a@example.com", "pw"),
        ("   ", "a@example.com", "pw"),
        ("Name", "", "pw"),
        ("Name", "  ", "pw"),
        ("Name", "a@example.com", ""),
        ("Name", "a@example.com", "   "),
        (None, None, None),
    ],
)
async def test_register_requires_all_fields(directory, memory_store, full_name, email, password):
    with pytest.raises(ValidationError):
        await directory.register(full_name, email, password)
    assert memory_store.writes == []


@pytest.mark.asyncio
async def test_register_rejects_password_bcrypt_would_truncate(directory):
    with pytest.raises(ValidationError):
        await directory.register("Name", "a@example.com", "x" * 73)


@pytest.mark.asyncio
async def test_login_any_case(directory):
    registered = await directory.register("Mai", "mai@example.com", "s3cret")

    user = await directory.login(" MAI@example.com", "s3cret")

    assert user.id == registered.id
    assert user.role == UserRole.MEMBER


@pytest.mark.asyncio
async def test_login_wrong_password(directory):
    await directory.register("Mai", "mai@example.com", "s3cret")

    with pytest.raises(AuthError) as exc_info:
        await directory.login("mai@example.com", "S3CRET")
    assert exc_info.value.message == "invalid_credentials"


@pytest.mark.asyncio
async def test_login_unknown_email(directory):
    with pytest.raises(AuthError):
        await directory.login("nobody@example.com", "whatever")


@pytest.mark.asyncio
@pytest.mark.parametrize("email,password", [("", "pw"), ("a@example.com", ""), (None, None)])
async def test_login_requires_both_fields(directory, email, password):
    with pytest.raises(ValidationError):
        await directory.login(email, password)


@pytest.mark.asyncio
async def test_legacy_plaintext_password_is_upgraded_on_login(directory, memory_store):
    await memory_store.write(USERS, [{
        "id": "U_1700000000000",
        "fullName": "Old Admin",
        "email": "Admin@Example.com",
        "password": "admin123",
        "role": "admin",
        "createdAt": "2024-01-01T00:00:00.000Z",
    }])

    user = await directory.login("admin@example.com", "admin123")

    assert user.role == UserRole.ADMIN
    assert "password" not in user.to_public()
    stored = (await memory_store.read(USERS))[0]
    assert "password" not in stored
    assert check_password("admin123", stored["passwordHash"])
    # Still works after the upgrade
    assert (await directory.login("admin@example.com", "admin123")).id == "U_1700000000000"


@pytest.mark.asyncio
async def test_legacy_plaintext_wrong_password_is_not_upgraded(directory, memory_store):
    await memory_store.write(USERS, [{"id": "U_1", "fullName": "X", "email": "x@example.com", "password": "pw"}])

    with pytest.raises(AuthError):
        await directory.login("x@example.com", "nope")
    assert (await memory_store.read(USERS))[0]["password"] == "pw"


@pytest.mark.asyncio
async def test_list_returns_users_in_registration_order(directory):
    await directory.register("A", "a@example.com", "pw")
    await directory.register("B", "b@example.com", "pw")

    users = await directory.list()

    assert [u.email for u in users] == ["a@example.com", "b@example.com"]


def test_new_id_is_unique_and_prefixed():
    ids = [new_id("FB") for _ in range(500)]

    assert len(set(ids)) == 500
    assert all(i.startswith("FB_") for i in ids)
    stamps = [int(i.split("_")[1]) for i in ids]
    assert stamps == sorted(stamps)
