"""
Tests for the membership, prompt and response services without HTTP.
"""
from datetime import datetime, timedelta

import pytest

from intouch.core.exceptions import ConflictException, ForbiddenException, NotFoundException, ValidationException
from intouch.schemas.response import HighLowContent, TextContent
from intouch.models import Response
from intouch.services import pod_service, prompt_service, response_service


@pytest.fixture
def friends(db, make_user):
    """Pod "Friends" created by alice, with bob as a plain member."""
    alice = make_user("alice")
    bob = make_user("bob")
    pod = pod_service.create_pod(alice.id, "Friends", None, db)
    pod_service.add_pod_member(pod.id, bob.id, db)
    return pod, alice, bob


def test_is_pod_member(db, make_user):
    alice = make_user("alice")
    bob = make_user("bob")
    pod = pod_service.create_pod(alice.id, "Friends", None, db)

    assert pod_service.is_pod_member(pod.id, alice.id, db) is True
    assert pod_service.is_pod_member(pod.id, bob.id, db) is False

    pod_service.add_pod_member(pod.id, bob.id, db)
    assert pod_service.is_pod_member(pod.id, bob.id, db) is True


def test_member_count_tracks_adds_and_removes(db, make_user):
    owner = make_user("owner")
    others = [make_user(f"user{i}") for i in range(4)]
    pod = pod_service.create_pod(owner.id, "Friends", None, db)

    for user in others:
        pod_service.add_pod_member(pod.id, user.id, db)
    assert pod_service.count_pod_members(pod.id, db) == 5

    assert pod_service.remove_pod_member(pod.id, others[0].id, db) is True
    assert pod_service.remove_pod_member(pod.id, others[0].id, db) is False
    assert pod_service.count_pod_members(pod.id, db) == 4
    assert len(pod_service.get_pod_members(pod.id, db)) == 4


def test_duplicate_membership_rejected(db, friends):
    pod, alice, bob = friends
    with pytest.raises(ConflictException):
        pod_service.add_pod_member(pod.id, bob.id, db)
    assert pod_service.count_pod_members(pod.id, db) == 2


def test_get_user_pods(db, friends):
    pod, alice, bob = friends

    [(alice_pod, alice_count, alice_admin)] = pod_service.get_user_pods(alice.id, db)
    [(bob_pod, bob_count, bob_admin)] = pod_service.get_user_pods(bob.id, db)
    assert alice_pod.id == bob_pod.id == pod.id
    assert alice_count == bob_count == 2
    assert alice_admin is True
    assert bob_admin is False


def test_require_pod_member(db, friends, make_user):
    pod, alice, bob = friends
    outsider = make_user("mallory")

    assert pod_service.require_pod_member(pod.id, bob.id, db).user_id == bob.id
    with pytest.raises(ForbiddenException):
        pod_service.require_pod_member(pod.id, outsider.id, db)
    with pytest.raises(ForbiddenException):
        pod_service.require_pod_admin(pod.id, bob.id, db)


def test_get_user_with_pods_unknown_user(db):
    with pytest.raises(NotFoundException):
        pod_service.get_user_with_pods(9999, db)


def test_current_prompt(db, make_prompt):
    assert prompt_service.get_current_prompt(db) is None

    make_prompt("Inactive", is_active=False)
    assert prompt_service.get_current_prompt(db) is None

    make_prompt("Two weeks ago", days_ago=14)
    latest = make_prompt("This week", days_ago=1)
    make_prompt("Last week", days_ago=8)
    assert prompt_service.get_current_prompt(db).id == latest.id


def test_create_prompt(db):
    start = datetime(2026, 10, 18)
    prompt = prompt_service.create_prompt(
        "Weekly Check-in", "high-low", start, start + timedelta(days=6), db
    )
    assert prompt.is_active is True
    assert prompt_service.get_current_prompt(db).id == prompt.id


def test_prompt_stats_unknown_prompt(db, friends):
    pod, _, _ = friends
    with pytest.raises(NotFoundException):
        prompt_service.get_prompt_with_stats(9999, pod.id, db)


def test_weekly_check_in_scenario(db, friends, make_prompt):
    pod, alice, _ = friends
    prompt = make_prompt("Weekly Check-in")

    _, responses, members = prompt_service.get_prompt_with_stats(prompt.id, pod.id, db)
    assert (responses, members) == (0, 2)

    content = HighLowContent(high="got a promotion", low="missed a flight")
    response_service.create_response(alice.id, prompt.id, pod.id, content, db)
    _, responses, _ = prompt_service.get_prompt_with_stats(prompt.id, pod.id, db)
    assert responses == 1

    with pytest.raises(ConflictException):
        response_service.create_response(alice.id, prompt.id, pod.id, TextContent(text="again"), db)
    _, responses, _ = prompt_service.get_prompt_with_stats(prompt.id, pod.id, db)
    assert responses == 1


def test_create_response_rejects_non_member(db, friends, make_prompt, make_user):
    pod, _, _ = friends
    outsider = make_user("mallory")
    prompt = make_prompt()

    with pytest.raises(ForbiddenException):
        response_service.create_response(outsider.id, prompt.id, pod.id, TextContent(text="hi"), db)
    assert response_service.get_user_response_for_prompt(outsider.id, prompt.id, pod.id, db) is None


def test_stored_content_round_trips_variant(db, friends, make_prompt):
    pod, alice, _ = friends
    prompt = make_prompt()
    content = HighLowContent(high="hiked", low="rain")

    response = response_service.create_response(alice.id, prompt.id, pod.id, content, db, image_url="/img/1.jpg")
    out = response_service.to_response_out(response)
    assert out.content == content
    assert out.image_url == "/img/1.jpg"


def test_like_then_unlike_restores_count(db, friends, make_prompt):
    pod, alice, bob = friends
    prompt = make_prompt()
    response = response_service.create_response(alice.id, prompt.id, pod.id, TextContent(text="hi"), db)

    before = response_service.count_response_likes(response.id, db)
    response_service.like_response(response.id, bob.id, db)
    assert response_service.count_response_likes(response.id, db) == before + 1

    assert response_service.unlike_response(response.id, bob.id, db) is True
    assert response_service.count_response_likes(response.id, db) == before
    assert response_service.unlike_response(response.id, bob.id, db) is False


def test_like_is_idempotent(db, friends, make_prompt):
    pod, alice, bob = friends
    prompt = make_prompt()
    response = response_service.create_response(alice.id, prompt.id, pod.id, TextContent(text="hi"), db)

    first = response_service.like_response(response.id, bob.id, db)
    second = response_service.like_response(response.id, bob.id, db)
    assert first.id == second.id
    assert len(response_service.get_response_likes(response.id, db)) == 1


def test_like_rejects_outsider(db, friends, make_prompt, make_user):
    pod, alice, _ = friends
    outsider = make_user("mallory")
    prompt = make_prompt()
    response = response_service.create_response(alice.id, prompt.id, pod.id, TextContent(text="hi"), db)

    with pytest.raises(ForbiddenException):
        response_service.like_response(response.id, outsider.id, db)
    with pytest.raises(NotFoundException):
        response_service.like_response(9999, alice.id, db)


def test_comments_show_in_feed(db, friends, make_prompt):
    pod, alice, bob = friends
    prompt = make_prompt()
    response = response_service.create_response(alice.id, prompt.id, pod.id, TextContent(text="hi"), db)

    response_service.add_comment(response.id, bob.id, "Congrats!", db)
    with pytest.raises(ValidationException):
        response_service.add_comment(response.id, bob.id, "   ", db)

    [entry] = response_service.get_pod_responses(pod.id, alice.id, db)
    assert entry.comments_count == 1
    assert entry.comments[0].content == "Congrats!"
    assert entry.comments[0].user.username == "bob"


def test_pod_responses_is_liked_per_viewer(db, friends, make_prompt):
    pod, alice, bob = friends
    prompt = make_prompt()
    response = response_service.create_response(alice.id, prompt.id, pod.id, TextContent(text="hi"), db)
    response_service.like_response(response.id, bob.id, db)

    [for_bob] = response_service.get_pod_responses(pod.id, bob.id, db)
    [for_alice] = response_service.get_pod_responses(pod.id, alice.id, db)
    assert for_bob.is_liked is True
    assert for_alice.is_liked is False
    assert for_bob.likes_count == for_alice.likes_count == 1


def test_sole_admin_cannot_be_removed(db, friends):
    pod, alice, bob = friends

    with pytest.raises(ConflictException):
        pod_service.remove_pod_member(pod.id, alice.id, db)
    assert pod_service.count_pod_members(pod.id, db) == 2
    assert pod_service.count_pod_admins(pod.id, db) == 1

    assert pod_service.remove_pod_member(pod.id, bob.id, db) is True


def test_admin_removable_when_another_admin_remains(db, friends, make_user):
    pod, alice, _ = friends
    carol = make_user("carol")
    pod_service.add_pod_member(pod.id, carol.id, db, is_admin=True)

    assert pod_service.remove_pod_member(pod.id, alice.id, db) is True
    assert pod_service.count_pod_admins(pod.id, db) == 1


def test_duplicate_response_rejected_by_unique_constraint(db, friends, make_prompt, monkeypatch):
    """A second insert that slips past the existence check still conflicts."""
    pod, alice, _ = friends
    prompt = make_prompt()
    response_service.create_response(alice.id, prompt.id, pod.id, TextContent(text="first"), db)

    monkeypatch.setattr(response_service, "get_user_response_for_prompt", lambda *args, **kwargs: None)
    with pytest.raises(ConflictException):
        response_service.create_response(alice.id, prompt.id, pod.id, TextContent(text="second"), db)

    assert db.query(Response).filter(Response.prompt_id == prompt.id).count() == 1


def test_like_lost_race_returns_existing_like(db, friends, make_prompt, monkeypatch):
    """A like that loses the insert race returns the row that won."""
    pod, alice, bob = friends
    prompt = make_prompt()
    response = response_service.create_response(alice.id, prompt.id, pod.id, TextContent(text="hi"), db)
    first = response_service.like_response(response.id, bob.id, db)

    real_get_like = response_service.get_like
    calls = []

    def stale_then_real(*args, **kwargs):
        calls.append(args)
        if len(calls) == 1:
            return None
        return real_get_like(*args, **kwargs)

    monkeypatch.setattr(response_service, "get_like", stale_then_real)
    second = response_service.like_response(response.id, bob.id, db)

    assert second.id == first.id
    assert len(calls) == 2
    assert len(response_service.get_response_likes(response.id, db)) == 1


def test_like_race_without_winner_conflicts(db, friends, make_prompt, monkeypatch):
    pod, alice, bob = friends
    prompt = make_prompt()
    response = response_service.create_response(alice.id, prompt.id, pod.id, TextContent(text="hi"), db)
    response_service.like_response(response.id, bob.id, db)

    monkeypatch.setattr(response_service, "get_like", lambda *args, **kwargs: None)
    with pytest.raises(ConflictException):
        response_service.like_response(response.id, bob.id, db)
    assert response_service.count_response_likes(response.id, db) == 1
