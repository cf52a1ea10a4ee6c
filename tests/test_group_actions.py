from __future__ import annotations

import pytest

from simple_contacts.group_actions import GROUPS_TAB_MASK, GroupActions
from simple_contacts.models import Contact, Group


@pytest.fixture
def refreshes():
    return []


def _actions(storage, refreshes, directory=None, extra_groups=()):
    groups = storage.groups.get_all() + list(extra_groups)
    return GroupActions(storage, groups, refresh=refreshes.append, directory=directory)


def test_edit_requires_exactly_one_selection(storage, refreshes):
    storage.groups.insert("A")
    storage.groups.insert("B")
    actions = _actions(storage, refreshes)

    actions.select_all()
    assert actions.edit_selected_group("X") is False

    actions.clear_selection()
    assert actions.edit_selected_group("X") is False
    assert refreshes == []


def test_edit_renames_private_group_and_refreshes(storage, refreshes):
    g = storage.groups.insert("Family")
    actions = _actions(storage, refreshes)

    actions.toggle_selection(0)
    assert actions.edit_selected_group("Close family") is True

    assert storage.groups.get_by_id(g.id).title == "Close family"
    assert actions.groups[0].title == "Close family"
    assert actions.selected_positions == set()
    assert refreshes == [GROUPS_TAB_MASK]


def test_edit_external_group_goes_to_directory(storage, refreshes, fake_directory):
    actions = _actions(storage, refreshes, directory=fake_directory, extra_groups=[Group(3, "Coworkers")])

    actions.toggle_selection(0)
    assert actions.edit_selected_group("Colleagues") is True

    assert fake_directory.renamed == [Group(3, "Colleagues")]
    assert storage.groups.get_all() == []


def test_edit_external_group_without_directory_fails(storage, refreshes):
    actions = _actions(storage, refreshes, extra_groups=[Group(3, "Coworkers")])

    actions.toggle_selection(0)

    assert actions.edit_selected_group("Colleagues") is False
    assert refreshes == []


def test_delete_all_selected_groups_empties_the_collection(storage, refreshes):
    for title in ("A", "B", "C"):
        storage.groups.insert(title)
    actions = _actions(storage, refreshes)

    actions.select_all()
    removed = actions.delete_selected_groups()

    assert len(removed) == 3
    assert actions.groups == []
    assert storage.groups.get_all() == []
    assert refreshes == [GROUPS_TAB_MASK]


def test_delete_routes_private_and_external_groups(storage, refreshes, fake_directory):
    private = storage.groups.insert("Family")
    actions = _actions(storage, refreshes, directory=fake_directory, extra_groups=[Group(5, "Coworkers"), Group(6, "Gym")])

    actions.toggle_selection(0)
    actions.toggle_selection(1)
    actions.delete_selected_groups()

    assert storage.groups.get_by_id(private.id) is None
    assert fake_directory.deleted_groups == [5]
    assert [g.title for g in actions.groups] == ["Gym"]


def test_delete_cleans_membership_of_deleted_groups(storage, refreshes):
    g1 = storage.groups.insert("A")
    g2 = storage.groups.insert("B")
    keep = storage.groups.insert("Keep")
    cid = storage.contacts.insert_returning_id(Contact(first_name="Ada", groups=[g1, g2, keep]))
    actions = _actions(storage, refreshes)

    actions.toggle_selection(0)
    actions.toggle_selection(1)
    actions.delete_selected_groups()

    raw = storage.conn.execute('SELECT "groups" FROM contacts WHERE id=?', (cid,)).fetchone()[0]
    assert raw == f"[{keep.id}]"


def test_delete_with_nothing_selected_is_a_no_op(storage, refreshes):
    storage.groups.insert("A")
    actions = _actions(storage, refreshes)

    assert actions.delete_selected_groups() == []
    assert len(storage.groups.get_all()) == 1
    assert refreshes == []


def test_toggle_selection_rejects_out_of_range(storage, refreshes):
    actions = _actions(storage, refreshes)

    with pytest.raises(IndexError):
        actions.toggle_selection(0)


def test_update_items_resets_selection(storage, refreshes):
    storage.groups.insert("A")
    actions = _actions(storage, refreshes)
    actions.select_all()

    actions.update_items([Group(1, "X"), Group(2, "Y")])

    assert actions.selected_positions == set()
    assert actions.is_one_item_selected() is False
    assert [g.title for g in actions.groups] == ["X", "Y"]
