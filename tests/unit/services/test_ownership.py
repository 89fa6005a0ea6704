"""Unit tests for ownership checks and list helpers."""

from dataclasses import dataclass, field
from uuid import UUID, uuid4

import pytest

from core.exceptions import AuthorizationError
from domain.services.ownership import (
    find_index,
    head_insert,
    index_of_id,
    remove_at,
    remove_by_id,
    require_owner,
)


@dataclass
class Entry:
    label: str
    id: UUID = field(default_factory=uuid4)


class TestFindIndex:
    def test_returns_first_match(self) -> None:
        assert find_index([1, 2, 3, 2], lambda x: x == 2) == 1

    def test_returns_none_without_match(self) -> None:
        assert find_index([1, 2, 3], lambda x: x == 9) is None

    def test_empty_list(self) -> None:
        assert find_index([], lambda x: True) is None


class TestIndexOfId:
    def test_locates_entry(self) -> None:
        entries = [Entry("a"), Entry("b"), Entry("c")]

        assert index_of_id(entries, entries[2].id) == 2

    def test_none_id_never_matches(self) -> None:
        assert index_of_id([Entry("a")], None) is None


class TestHeadInsert:
    def test_new_item_goes_first(self) -> None:
        items = ["old"]

        head_insert(items, "new")

        assert items == ["new", "old"]

    def test_sequence_is_most_recent_first(self) -> None:
        items: list[str] = []
        for label in ("x", "y", "z"):
            head_insert(items, label)

        assert items == ["z", "y", "x"]


class TestRemoveAt:
    def test_removes_only_that_position(self) -> None:
        items = ["a", "b", "c"]

        removed = remove_at(items, 1)

        assert removed == "b"
        assert items == ["a", "c"]

    def test_none_index_is_noop(self) -> None:
        items = ["a", "b"]

        assert remove_at(items, None) is None
        assert items == ["a", "b"]


class TestRemoveById:
    def test_keeps_order_of_the_rest(self) -> None:
        entries = [Entry("a"), Entry("b"), Entry("c")]
        target = entries[1]

        removed = remove_by_id(entries, target.id)

        assert removed is target
        assert [e.label for e in entries] == ["a", "c"]

    def test_unknown_id_leaves_list_unchanged(self) -> None:
        entries = [Entry("a"), Entry("b")]

        assert remove_by_id(entries, uuid4()) is None
        assert [e.label for e in entries] == ["a", "b"]


class TestRequireOwner:
    def test_passes_for_owner(self) -> None:
        owner = uuid4()

        require_owner(owner, owner)

    def test_raises_for_other_user(self) -> None:
        with pytest.raises(AuthorizationError) as exc_info:
            require_owner(uuid4(), uuid4())

        assert exc_info.value.status_code == 403
        assert exc_info.value.message == "User not authorized"

    def test_custom_message(self) -> None:
        with pytest.raises(AuthorizationError) as exc_info:
            require_owner(uuid4(), uuid4(), "Not yours")

        assert exc_info.value.message == "Not yours"
