# tests/test_voting_service.py
"""Tests for the voting service state machine and principal handling."""

import pytest

from feature_vote.services.errors import (
    DuplicateVoteError,
    FeatureNotFoundError,
    UnauthenticatedError,
    UserNotFoundError,
    ValidationError,
    VoteNotFoundError,
)
from feature_vote.services.voting import Principal


def test_login_returns_principal(voting_service, alice) -> None:
    principal = voting_service.login("alice")
    assert principal == Principal(id=alice.id, username="alice")


def test_login_unknown_user_does_not_create_account(voting_service, ledger, alice) -> None:
    with pytest.raises(UserNotFoundError) as exc_info:
        voting_service.login("mallory")
    assert exc_info.value.code == "user-not-found"

    with pytest.raises(UserNotFoundError):
        ledger.find_user_by_username("mallory")


def test_login_requires_username(voting_service) -> None:
    with pytest.raises(ValidationError):
        voting_service.login("")


def test_resolve_principal_for_missing_user(voting_service) -> None:
    with pytest.raises(UnauthenticatedError):
        voting_service.resolve_principal(424242)


def test_create_feature_returns_view(voting_service, alice_principal) -> None:
    view = voting_service.create_feature(alice_principal, "  Dark mode  ", None)
    assert view.title == "Dark mode"
    assert view.description == ""
    assert view.creator_username == "alice"
    assert view.vote_count == 0
    assert view.has_voted is False


def test_create_feature_empty_title_writes_nothing(voting_service, ledger, alice_principal) -> None:
    with pytest.raises(ValidationError):
        voting_service.create_feature(alice_principal, "", "x")
    assert ledger.count_features() == 0


@pytest.mark.parametrize(
    ("operation", "args"),
    [
        ("create_feature", ("Dark mode", "")),
        ("cast_vote", (1,)),
        ("retract_vote", (1,)),
        ("vote_status", (1,)),
    ],
)
def test_operations_require_principal(voting_service, ledger, operation, args) -> None:
    with pytest.raises(UnauthenticatedError):
        getattr(voting_service, operation)(None, *args)
    assert ledger.count_features() == 0
    assert ledger.count_votes() == 0


def test_cast_retract_cast_cycle(voting_service, ledger, feature, bob_principal) -> None:
    voting_service.cast_vote(bob_principal, feature.id)
    voting_service.retract_vote(bob_principal, feature.id)
    voting_service.cast_vote(bob_principal, feature.id)

    assert ledger.count_votes() == 1
    assert voting_service.vote_status(bob_principal, feature.id) is True


def test_recast_while_voted_is_duplicate(voting_service, ledger, feature, bob_principal) -> None:
    voting_service.cast_vote(bob_principal, feature.id)
    with pytest.raises(DuplicateVoteError):
        voting_service.cast_vote(bob_principal, feature.id)
    assert ledger.count_votes() == 1


def test_retract_without_vote(voting_service, ledger, feature, alice_principal, bob_principal) -> None:
    voting_service.cast_vote(alice_principal, feature.id)
    with pytest.raises(VoteNotFoundError):
        voting_service.retract_vote(bob_principal, feature.id)
    assert ledger.count_votes() == 1


def test_cast_vote_unknown_feature(voting_service, bob_principal) -> None:
    with pytest.raises(FeatureNotFoundError):
        voting_service.cast_vote(bob_principal, 9999)


def test_vote_status_is_side_effect_free(voting_service, ledger, feature, bob_principal) -> None:
    assert voting_service.vote_status(bob_principal, feature.id) is False
    assert ledger.count_votes() == 0

    voting_service.cast_vote(bob_principal, feature.id)
    assert voting_service.vote_status(bob_principal, feature.id) is True
    assert ledger.count_votes() == 1


def test_vote_status_unknown_feature(voting_service, bob_principal) -> None:
    with pytest.raises(FeatureNotFoundError):
        voting_service.vote_status(bob_principal, 9999)


def test_list_features_has_voted_per_caller(
    voting_service, feature, alice_principal, bob_principal
) -> None:
    voting_service.cast_vote(bob_principal, feature.id)

    [anonymous] = voting_service.list_features()
    [as_bob] = voting_service.list_features(bob_principal)
    [as_alice] = voting_service.list_features(alice_principal)

    assert anonymous.has_voted is None
    assert as_bob.has_voted is True
    assert as_alice.has_voted is False
    assert anonymous.vote_count == as_bob.vote_count == as_alice.vote_count == 1


def test_end_to_end_scenario(voting_service, alice, bob) -> None:
    alice_principal = voting_service.login("alice")
    bob_principal = voting_service.login("bob")

    created = voting_service.create_feature(alice_principal, "Dark mode", "")
    voting_service.cast_vote(bob_principal, created.id)

    [entry] = voting_service.list_features()
    assert entry.id == created.id
    assert entry.vote_count == 1
    assert entry.creator_username == "alice"

    voting_service.retract_vote(bob_principal, created.id)
    [entry] = voting_service.list_features()
    assert entry.vote_count == 0
