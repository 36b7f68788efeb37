import pytest

from app.core.errors import Forbidden
from app.domains.access import Action, assert_access, can_access, can_set_admin_flag, evaluate
from app.domains.documents.entities import Document
from app.domains.identity.entities import User
from app.domains.structures.entities import Structure

ADMIN = User(id="admin-id", name="admin", password_hash="h", is_admin=True)
ALICE = User(id="alice-id", name="alice", password_hash="h")
BOB = User(id="bob-id", name="bob", password_hash="h")

ALICE_DOC = Document(id="doc-1", owner=ALICE.id, title="t")
STRUCTURE = Structure(id="s-1", name="s")


@pytest.mark.parametrize("action", list(Action))
def test_admin_may_do_everything(action):
    for entity in (ALICE, ALICE_DOC, STRUCTURE):
        assert can_access(ADMIN, action, entity)


@pytest.mark.parametrize("action", [Action.READ, Action.UPDATE, Action.REMOVE])
def test_non_owner_is_denied_documents(action):
    assert not can_access(BOB, action, ALICE_DOC)
    with pytest.raises(Forbidden):
        assert_access(BOB, action, ALICE_DOC)


@pytest.mark.parametrize("action", [Action.READ, Action.UPDATE, Action.REMOVE, Action.CREATE])
def test_owner_may_work_with_own_documents(action):
    assert can_access(ALICE, action, ALICE_DOC)


def test_users_may_read_and_update_only_themselves():
    assert can_access(ALICE, Action.READ, ALICE)
    assert can_access(ALICE, Action.UPDATE, ALICE)
    assert not can_access(ALICE, Action.READ, BOB)
    assert not can_access(ALICE, Action.UPDATE, BOB)


def test_non_admin_cannot_remove_users_even_themselves():
    assert not can_access(ALICE, Action.REMOVE, ALICE)
    assert not can_access(ALICE, Action.REMOVE, BOB)


def test_structures_are_read_only_for_non_admins():
    assert can_access(ALICE, Action.READ, STRUCTURE)
    for action in (Action.CREATE, Action.UPDATE, Action.REMOVE):
        assert not can_access(ALICE, action, STRUCTURE)


def test_unauthenticated_actor_is_denied():
    for entity in (ALICE, ALICE_DOC, STRUCTURE):
        decision = evaluate(None, Action.READ, entity)
        assert not decision
        assert decision.reason == "Authentication required"


def test_self_access_is_checked_before_admin_override():
    admin_doc = Document(id="doc-2", owner=ADMIN.id, title="mine")

    assert evaluate(ADMIN, Action.UPDATE, admin_doc).reason == "own record"
    assert evaluate(ADMIN, Action.UPDATE, ALICE_DOC).reason == "admin override"


def test_only_admin_may_set_admin_flag():
    assert can_set_admin_flag(ADMIN)
    assert not can_set_admin_flag(ALICE)
    assert not can_set_admin_flag(None)


def test_unknown_entity_type_is_an_error():
    with pytest.raises(TypeError):
        evaluate(ADMIN, Action.READ, object())
