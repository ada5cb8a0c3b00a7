# File: tests/test_state.py
"""Archive, host throttle and frontier: the state owned by the dispatcher."""
import pytest

from site_crawler.crawler.archive import Archive
from site_crawler.crawler.frontier import Frontier
from site_crawler.crawler.models import Image, Page
from site_crawler.crawler.throttle import HostThrottle


# --------------------------------------------------------------------------- #
#                                  Archive                                    #
# --------------------------------------------------------------------------- #


def test_difference_then_insert_is_idempotent():
    archive = Archive()
    found = {Page("https://example.test/a", 1), Image("https://example.test/z.png")}

    first = archive.difference(found)
    archive.insert_all(first)
    second = archive.difference(found)

    assert first == found
    assert second == set()
    assert len(archive) == 2


def test_page_identity_includes_depth():
    archive = Archive()
    archive.insert_all([Page("https://example.test/a", 1)])

    assert Page("https://example.test/a", 1) in archive
    assert not archive.contains(Page("https://example.test/a", 2))
    assert archive.difference([Page("https://example.test/a", 2)]) == {
        Page("https://example.test/a", 2)
    }


def test_page_and_image_with_same_url_are_distinct():
    archive = Archive()
    archive.insert_all([Image("https://example.test/a")])
    assert not archive.contains(Page("https://example.test/a", 0))


def test_archive_only_grows():
    archive = Archive()
    archive.insert_all([Image("https://example.test/1.png")])
    archive.insert_all([Image("https://example.test/1.png"), Image("https://example.test/2.png")])
    assert set(archive) == {Image("https://example.test/1.png"), Image("https://example.test/2.png")}


# --------------------------------------------------------------------------- #
#                               Host throttle                                 #
# --------------------------------------------------------------------------- #


def test_ceiling_is_a_hard_cap():
    throttle = HostThrottle(ceiling=3)
    assert [throttle.try_admit("example.test") for _ in range(3)] == [True, True, True]
    assert throttle.in_flight("example.test") == 3

    # exactly at the ceiling: denied, count unchanged
    assert throttle.try_admit("example.test") is False
    assert throttle.in_flight("example.test") == 3

    throttle.release("example.test")
    assert throttle.try_admit("example.test") is True
    assert throttle.in_flight("example.test") == 3


def test_ceiling_of_one():
    throttle = HostThrottle(ceiling=1)
    assert throttle.try_admit("a.test")
    assert not throttle.try_admit("a.test")
    throttle.release("a.test")
    assert throttle.try_admit("a.test")


def test_hosts_are_counted_independently():
    throttle = HostThrottle(ceiling=1)
    assert throttle.try_admit("a.test")
    assert throttle.try_admit("b.test")
    assert not throttle.try_admit("a.test")
    assert throttle.in_flight() == 2


def test_release_symmetry_returns_to_zero():
    throttle = HostThrottle(ceiling=5)
    for _ in range(4):
        throttle.try_admit("a.test")
    for _ in range(4):
        throttle.release("a.test")
    assert throttle.in_flight("a.test") == 0
    assert throttle.in_flight() == 0


def test_release_without_admission_is_an_error():
    throttle = HostThrottle(ceiling=2)
    with pytest.raises(RuntimeError):
        throttle.release("never-admitted.test")


def test_ceiling_must_be_positive():
    with pytest.raises(ValueError):
        HostThrottle(ceiling=0)


# --------------------------------------------------------------------------- #
#                                  Frontier                                   #
# --------------------------------------------------------------------------- #


def test_frontier_drain_empties_it():
    frontier = Frontier([Page("https://example.test/", 0)])
    frontier.push(Image("https://example.test/z.png"))
    frontier.extend([Page("https://example.test/a", 1)])
    assert len(frontier) == 3

    taken = frontier.drain()

    assert len(taken) == 3
    assert not frontier
    assert list(frontier) == []
