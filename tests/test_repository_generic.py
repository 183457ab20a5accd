"""Tests for GenericEntityRepositorySupport."""

from unittest.mock import patch

import pytest
from sqlalchemy.exc import MultipleResultsFound, NoResultFound

from surisql.core.exceptions import OptimisticLockError, VersionAccessError
from surisql.repositories import GenericEntityRepositorySupport
from tests.models import Item, Tag


@pytest.fixture
def repo(session) -> GenericEntityRepositorySupport:
    return GenericEntityRepositorySupport(session)


class TestFinders:
    def test_find_by_per_type(self, repo, items, tags) -> None:
        assert repo.find_by(Item, 2) is items[1]
        assert repo.find_by(Tag, 2) is tags[1]
        assert repo.find_by(Tag, 3) is None

    def test_find_all(self, repo, items, tags) -> None:
        assert [tag.label for tag in repo.find_all(Tag)] == ["new", "sale"]
        assert len(repo.find_all(Item)) == 7

    def test_find_all_paginated(self, repo, items) -> None:
        assert [item.id for item in repo.find_all(Item, 1, 2)] == [2, 3]
        assert [item.id for item in repo.find_all(Item, 0, 2)] == [1, 2]
        assert [item.id for item in repo.find_all(Item, 6, 0)] == [7]


class TestNamedQueries:
    def test_list(self, repo, tags) -> None:
        assert repo.find_by_named_query(Tag, "Tag.findByLabel", {"label": "sale"}) == [tags[1]]

    def test_any(self, repo, items) -> None:
        assert repo.find_any_by_named_query(Item, "Item.findByName", {"name": "None"}) is None
        item = repo.find_any_by_named_query(Item, "Item.findByCategory", {"category": "art"})
        assert item.name == "Easel"

    def test_unique(self, repo, items) -> None:
        assert repo.find_unique_by_named_query(Item, "Item.findByName", {"name": "Drill"}) is items[3]
        with pytest.raises(NoResultFound):
            repo.find_unique_by_named_query(Item, "Item.findByName", {"name": "None"})
        with pytest.raises(MultipleResultsFound):
            repo.find_unique_by_named_query(Item, "Item.findByCategory", {"category": "tools"})


class TestVersionCheck:
    def test_match(self, repo, items) -> None:
        assert repo.find_by_and_check_version(Item, 3, 1) is items[2]

    def test_mismatch(self, repo, items) -> None:
        with pytest.raises(OptimisticLockError) as exc_info:
            repo.find_by_and_check_version(Item, 3, 7)
        assert exc_info.value.entity is items[2]

    def test_missing_key(self, repo, items) -> None:
        with patch.object(repo, "check_version") as check:
            assert repo.find_by_and_check_version(Item, 404, 1) is None
        check.assert_not_called()

    def test_unversioned_type(self, repo, tags) -> None:
        with pytest.raises(VersionAccessError):
            repo.find_by_and_check_version(Tag, 1, 1)

    def test_finder_with_explicit_attribute(self, repo, tags) -> None:
        assert repo.find_by_and_check_version(Tag, 2, "sale", str, attribute="label") is tags[1]
        with pytest.raises(OptimisticLockError) as exc_info:
            repo.find_by_and_check_version(Tag, 2, "new", str, attribute="label")
        assert exc_info.value.details["actual_version"] == "sale"

    def test_explicit_attribute(self, repo, tags) -> None:
        repo.check_version(tags[0], "new", version_type=str, attribute="label")
        with pytest.raises(OptimisticLockError):
            repo.check_version(tags[0], "old", version_type=str, attribute="label")


class TestSharedOperations:
    def test_save_mixed_types(self, repo, session) -> None:
        item = Item(name="Hammer", category="tools", price=20)
        tag = Tag(label="clearance")
        assert repo.save_all([item, tag]) == [item, tag]
        repo.flush()
        assert repo.find_by(Item, item.id) is item
        assert repo.find_by(Tag, tag.id) is tag

    def test_remove_and_flush(self, repo, tags) -> None:
        repo.remove(tags[0])
        repo.flush()
        assert repo.find_all(Tag) == [tags[1]]
