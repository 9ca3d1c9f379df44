"""
Tests for UserService business rules.
"""
import threading
from unittest.mock import patch

import pytest

from roster.modules.users import constants
from roster.modules.users.domain.errors import (
    InternalUserError,
    UserNotFoundError,
    UserValidationError,
)
from roster.modules.users.domain.user import UserInput
from roster.modules.users.services.user_service import UserService


# ============================================================
# create_user
# ============================================================

def test_create_user_generates_id(user_service, juan_input):
    user = user_service.create_user(juan_input)

    assert user.id
    assert user.name == "Juan"
    assert user.email == "juan@test.com"
    assert user.age == 25


def test_create_user_defaults_age(user_service):
    user = user_service.create_user(UserInput(name="Ana", email="ana@test.com"))
    assert user.age == constants.DEFAULT_AGE == 0


def test_create_user_keeps_supplied_id(user_service):
    user = user_service.create_user(UserInput(name="Juan", email="juan@test.com", id="abc"))
    assert user.id == "abc"
    assert user_service.get_user("abc") == user


def test_create_user_rejects_taken_id(user_service, repository):
    user_service.create_user(UserInput(name="Juan", email="juan@test.com", id="abc"))

    with pytest.raises(UserValidationError) as exc_info:
        user_service.create_user(UserInput(name="Ana", email="ana@test.com", id="abc"))

    assert exc_info.value.field == "id"
    assert repository.find_by_id("abc").name == "Juan"


def test_generated_ids_are_unique(user_service):
    ids = {
        user_service.create_user(UserInput(name=f"User {i}", email=f"user{i}@test.com")).id
        for i in range(20)
    }
    assert len(ids) == 20


def test_create_then_get_round_trip(user_service, juan_input):
    created = user_service.create_user(juan_input)
    fetched = user_service.get_user(created.id)

    assert (fetched.name, fetched.email, fetched.age) == ("Juan", "juan@test.com", 25)


def test_create_user_none_input(user_service):
    with pytest.raises(UserValidationError) as exc_info:
        user_service.create_user(None)
    assert exc_info.value.field is None
    assert str(exc_info.value) == constants.USER_REQUIRED_MESSAGE


def test_create_user_invalid_name(user_service, repository):
    with pytest.raises(UserValidationError) as exc_info:
        user_service.create_user(UserInput(name="", email="juan@test.com", age=25))

    assert exc_info.value.field == "name"
    assert repository.count() == 0


def test_create_user_invalid_email(user_service):
    with pytest.raises(UserValidationError) as exc_info:
        user_service.create_user(UserInput(name="Juan", email="invalid-email", age=25))
    assert exc_info.value.field == "email"
    assert str(exc_info.value) == f"Error in field 'email': {constants.EMAIL_FORMAT_MESSAGE}"


def test_create_user_reports_first_failure_and_all_errors(user_service):
    with pytest.raises(UserValidationError) as exc_info:
        user_service.create_user(UserInput(name="J", email="bad", age=500))

    assert exc_info.value.field == "name"
    assert [error.field for error in exc_info.value.errors] == ["name", "email", "age"]


@pytest.mark.parametrize("email", ["juan@test.com", "JUAN@TEST.COM", "Juan@Test.Com"])
def test_create_user_duplicate_email(user_service, repository, juan_input, email):
    user_service.create_user(juan_input)

    with pytest.raises(UserValidationError) as exc_info:
        user_service.create_user(UserInput(name="Otro", email=email, age=30))

    assert exc_info.value.field == "email"
    assert repository.count() == 1


def test_concurrent_creates_with_same_email_admit_one(user_service, repository):
    barrier = threading.Barrier(10)
    outcomes = []
    outcomes_lock = threading.Lock()

    def worker(n):
        barrier.wait()
        try:
            user_service.create_user(UserInput(name=f"User {n}", email="same@test.com"))
            result = "created"
        except UserValidationError:
            result = "rejected"
        with outcomes_lock:
            outcomes.append(result)

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(10)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert outcomes.count("created") == 1
    assert outcomes.count("rejected") == 9
    assert repository.count() == 1


# ============================================================
# list_users
# ============================================================

def test_list_users_empty(user_service):
    assert user_service.list_users() == []


@pytest.mark.parametrize("names", [["Carlos", "Ana"], ["Ana", "Carlos"]])
def test_list_users_sorted_by_name(user_service, names):
    for name in names:
        user_service.create_user(UserInput(name=name, email=f"{name.lower()}@test.com"))

    assert [user.name for user in user_service.list_users()] == ["Ana", "Carlos"]


def test_list_users_sort_ignores_case(user_service):
    for name in ["bruno", "Carla", "ana"]:
        user_service.create_user(UserInput(name=name, email=f"{name.lower()}@test.com"))

    assert [user.name for user in user_service.list_users()] == ["ana", "bruno", "Carla"]


# ============================================================
# get_user
# ============================================================

@pytest.mark.parametrize("user_id", [None, "", "   "])
def test_get_user_blank_id(user_service, user_id):
    with pytest.raises(UserValidationError) as exc_info:
        user_service.get_user(user_id)
    assert exc_info.value.field == "id"


def test_get_user_not_found(user_service):
    with pytest.raises(UserNotFoundError) as exc_info:
        user_service.get_user("999")
    assert exc_info.value.user_id == "999"
    assert str(exc_info.value) == "User with ID '999' not found"


# ============================================================
# update_user
# ============================================================

def test_update_user_success(user_service, juan_input):
    created = user_service.create_user(juan_input)

    updated = user_service.update_user(
        created.id, UserInput(name="Juan Carlos", email="juan.carlos@test.com", age=26)
    )

    assert updated.id == created.id
    assert (updated.name, updated.email, updated.age) == ("Juan Carlos", "juan.carlos@test.com", 26)
    assert user_service.get_user(created.id) == updated


def test_update_user_ignores_input_id(user_service, juan_input):
    created = user_service.create_user(juan_input)

    updated = user_service.update_user(
        created.id, UserInput(name="Juan", email="juan@test.com", age=30, id="other")
    )

    assert updated.id == created.id
    assert user_service.count_users() == 1


def test_update_user_keeps_own_email(user_service, juan_input):
    created = user_service.create_user(juan_input)

    updated = user_service.update_user(created.id, UserInput(name="Juanito", email="JUAN@test.com", age=25))

    assert updated.name == "Juanito"
    assert updated.email == "JUAN@test.com"


def test_update_user_email_taken_by_other(user_service, juan_input):
    user_service.create_user(juan_input)
    ana = user_service.create_user(UserInput(name="Ana", email="ana@test.com", age=30))

    with pytest.raises(UserValidationError) as exc_info:
        user_service.update_user(ana.id, UserInput(name="Ana", email="juan@test.com", age=30))

    assert exc_info.value.field == "email"
    assert user_service.get_user(ana.id).email == "ana@test.com"


def test_update_user_not_found(user_service, juan_input):
    with pytest.raises(UserNotFoundError):
        user_service.update_user("999", juan_input)


def test_update_user_not_found_checked_before_input(user_service):
    with pytest.raises(UserNotFoundError):
        user_service.update_user("999", UserInput(name="", email="bad"))


def test_update_user_invalid_input(user_service, juan_input):
    created = user_service.create_user(juan_input)

    with pytest.raises(UserValidationError) as exc_info:
        user_service.update_user(created.id, UserInput(name="Juan", email="juan@test.com", age=121))

    assert exc_info.value.field == "age"
    assert user_service.get_user(created.id).age == 25


def test_update_user_none_input(user_service, juan_input):
    created = user_service.create_user(juan_input)
    with pytest.raises(UserValidationError):
        user_service.update_user(created.id, None)


def test_update_user_absent_age_defaults(user_service, juan_input):
    created = user_service.create_user(juan_input)

    updated = user_service.update_user(created.id, UserInput(name="Juan", email="juan@test.com"))

    assert updated.age == constants.DEFAULT_AGE


# ============================================================
# delete_user
# ============================================================

def test_delete_user_success(user_service, juan_input):
    created = user_service.create_user(juan_input)

    user_service.delete_user(created.id)

    with pytest.raises(UserNotFoundError):
        user_service.get_user(created.id)
    assert user_service.count_users() == 0


@pytest.mark.parametrize("user_id", [None, ""])
def test_delete_user_blank_id(user_service, user_id):
    with pytest.raises(UserValidationError):
        user_service.delete_user(user_id)


def test_delete_user_not_found(user_service):
    with pytest.raises(UserNotFoundError):
        user_service.delete_user("999")


def test_delete_user_reports_failed_removal(user_service, repository, juan_input):
    created = user_service.create_user(juan_input)

    with patch.object(repository, "delete_by_id", return_value=False) as delete_by_id:
        with pytest.raises(InternalUserError):
            user_service.delete_user(created.id)

    delete_by_id.assert_called_once_with(created.id)
    assert repository.exists_by_id(created.id)


# ============================================================
# wiring
# ============================================================

def test_service_builds_its_own_repository():
    service = UserService()
    service.create_user(UserInput(name="Juan", email="juan@test.com"))
    assert service.count_users() == 1
    assert UserService().count_users() == 0


def test_concurrent_deletes_of_same_user(user_service, juan_input):
    created = user_service.create_user(juan_input)
    barrier = threading.Barrier(8)
    outcomes = []
    outcomes_lock = threading.Lock()

    def worker():
        barrier.wait()
        try:
            user_service.delete_user(created.id)
            result = "deleted"
        except UserNotFoundError:
            result = "not_found"
        except InternalUserError:
            result = "internal"
        with outcomes_lock:
            outcomes.append(result)

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert outcomes.count("deleted") == 1
    assert outcomes.count("not_found") == 7
    assert "internal" not in outcomes
