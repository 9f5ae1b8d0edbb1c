# Area: Service Tests
"""Tests for GameService end-to-end scenarios."""

import os
import tempfile
from dataclasses import replace

import pytest
from rps_wager import (
    EventKind,
    GamePhase,
    GameService,
    InMemoryGameStore,
    Move,
    RecordingLedger,
    SqliteGameStore,
)
from rps_wager.errors import (
    GameAlreadyExistsError,
    GameNotFoundError,
    InvalidBetAmountError,
    InvalidMoveError,
    InvalidPhaseError,
    MoveAlreadyMadeError,
    SelfPlayForbiddenError,
    StorageKeyMismatchError,
    UnauthorizedCallerError,
)


@pytest.fixture
def ledger():
    return RecordingLedger()


@pytest.fixture
def service(ledger):
    return GameService(ledger=ledger, clock=lambda: 1_700_000_000.7)


@pytest.fixture
def game_key(service):
    """A game created by alice and joined by bob."""
    key = service.create_game("alice", 100).game_key
    service.join_game("bob", key)
    return key


class TestScenarios:
    """Full-match scenarios."""

    def test_creator_wins(self, service, ledger):
        """create(A,100) -> join(B) -> A Rock -> B Scissors: A wins."""
        key = service.create_game("alice", 100).game_key
        service.join_game("bob", key)
        service.make_move("alice", key, Move.ROCK)
        record = service.make_move("bob", key, Move.SCISSORS)
        assert record.phase == GamePhase.FINISHED
        assert record.winner_id == "alice"
        assert len(ledger.notices) == 1
        notice = ledger.notices[0]
        assert notice.winner_id == "alice"
        assert notice.bet_amount == 100
        assert notice.round_number == 1

    def test_draw_then_reset(self, service, game_key, ledger):
        """Paper/Paper draws; reset keeps bob and clears the round."""
        service.make_move("alice", game_key, "paper")
        record = service.make_move("bob", game_key, "paper")
        assert record.phase == GamePhase.FINISHED
        assert record.winner_id is None
        assert ledger.notices[0].is_draw

        record = service.reset_game("alice", game_key)
        assert record.phase == GamePhase.IN_PROGRESS
        assert record.creator_move == Move.UNSET
        assert record.opponent_move == Move.UNSET
        assert record.winner_id is None
        assert record.opponent_id == "bob"

    def test_repeat_move_rejected(self, service, game_key):
        """A second move before the opponent moves keeps the first."""
        service.make_move("alice", game_key, Move.ROCK)
        with pytest.raises(MoveAlreadyMadeError):
            service.make_move("alice", game_key, Move.PAPER)
        assert service.get_game(game_key).creator_move == Move.ROCK

    def test_created_at_from_clock(self, service):
        """Test created_at is the clock truncated to whole seconds."""
        assert service.create_game("alice", 1).created_at == 1_700_000_000


class TestRejections:
    """Rejected operations leave the stored record unchanged."""

    def test_join_non_waiting_unchanged(self, service, game_key):
        """Test joining a started game leaves the record unchanged."""
        before = service.get_game(game_key)
        with pytest.raises(InvalidPhaseError):
            service.join_game("carol", game_key)
        assert service.get_game(game_key) == before

    def test_self_join(self, service):
        """Test the creator cannot join their own game."""
        key = service.create_game("alice", 10).game_key
        with pytest.raises(SelfPlayForbiddenError):
            service.join_game("alice", key)
        assert service.get_game(key).phase == GamePhase.WAITING_FOR_OPPONENT

    def test_third_party_move_unchanged(self, service, game_key):
        """Test an outsider's move leaves the record unchanged."""
        before = service.get_game(game_key)
        with pytest.raises(UnauthorizedCallerError):
            service.make_move("carol", game_key, Move.ROCK)
        assert service.get_game(game_key) == before

    def test_unset_move(self, service, game_key):
        """Test the UNSET placeholder is not a playable move."""
        with pytest.raises(InvalidMoveError):
            service.make_move("alice", game_key, Move.UNSET)

    def test_reset_unfinished(self, service, game_key):
        """Test reset is rejected before the round finishes."""
        with pytest.raises(InvalidPhaseError):
            service.reset_game("alice", game_key)

    def test_reset_by_outsider(self, service, game_key):
        """Test only participants may reset a finished game."""
        service.make_move("alice", game_key, Move.ROCK)
        service.make_move("bob", game_key, Move.ROCK)
        with pytest.raises(UnauthorizedCallerError):
            service.reset_game("carol", game_key)

    def test_unknown_game(self, service):
        """Test operations on an unknown key raise GameNotFoundError."""
        with pytest.raises(GameNotFoundError):
            service.join_game("bob", "game-missing")
        with pytest.raises(GameNotFoundError):
            service.get_game("game-missing")

    def test_empty_caller(self, service, game_key):
        """Test an empty caller identity is unauthorized."""
        with pytest.raises(UnauthorizedCallerError):
            service.make_move("", game_key, Move.ROCK)

    def test_invalid_bet(self, service):
        """Test a negative bet is rejected and nothing is stored."""
        with pytest.raises(InvalidBetAmountError):
            service.create_game("alice", -1)
        assert service.find_game_by_creator("alice") is None

    @pytest.mark.parametrize("creator", [None, "", 42])
    def test_lookup_with_unusable_identity(self, service, creator):
        """Test key lookups reject identities the operations would reject."""
        with pytest.raises(UnauthorizedCallerError):
            service.game_key_for(creator)
        with pytest.raises(UnauthorizedCallerError):
            service.find_game_by_creator(creator)


class TestSingleGamePerCreator:
    """One record per creator at a time."""

    def test_active_game_blocks_create(self, service, game_key):
        """Test an unfinished game blocks a second create."""
        with pytest.raises(GameAlreadyExistsError):
            service.create_game("alice", 500)
        assert service.get_game(game_key).bet_amount == 100

    def test_finished_game_superseded(self, service, game_key):
        """Test a finished game is replaced by a fresh one."""
        service.make_move("alice", game_key, Move.ROCK)
        service.make_move("bob", game_key, Move.PAPER)
        record = service.create_game("alice", 500)
        assert record.game_key == game_key
        assert record.phase == GamePhase.WAITING_FOR_OPPONENT
        assert record.opponent_id is None
        assert record.bet_amount == 500

    def test_supersede_disabled(self, ledger):
        """Test replace_finished=False keeps the finished game."""
        service = GameService(ledger=ledger, replace_finished=False)
        key = service.create_game("alice", 1).game_key
        service.join_game("bob", key)
        service.make_move("alice", key, Move.ROCK)
        service.make_move("bob", key, Move.PAPER)
        with pytest.raises(GameAlreadyExistsError):
            service.create_game("alice", 2)

    def test_key_is_derived_from_creator(self, service):
        """Test the game key and lookup derive from the creator."""
        record = service.create_game("alice", 1)
        assert record.game_key == service.game_key_for("alice")
        assert service.find_game_by_creator("alice") == record
        assert service.find_game_by_creator("bob") is None


class TestKeyProof:
    """Records whose proof does not match their creator are rejected."""

    def test_tampered_record_rejected(self, ledger):
        """Test a record moved to another creator fails proof checks."""
        store = InMemoryGameStore()
        service = GameService(store=store, ledger=ledger)
        key = service.create_game("alice", 1).game_key
        store._games[key] = replace(store._games[key], creator_id="mallory")
        with pytest.raises(StorageKeyMismatchError):
            service.get_game(key)
        with pytest.raises(StorageKeyMismatchError):
            service.join_game("bob", key)


class TestReads:
    """Tests for listing and views."""

    def test_list_open_games(self, service, game_key):
        """Test listing all, open and in-progress games."""
        service.create_game("carol", 5)
        open_games = service.list_open_games()
        assert [g.creator_id for g in open_games] == ["carol"]
        assert len(service.list_games()) == 2
        assert [g.creator_id for g in service.list_games("in_progress")] == ["alice"]

    def test_view_hides_opponent_move(self, service, game_key):
        """Test a viewer sees only that the other move was committed."""
        service.make_move("alice", game_key, Move.ROCK)
        view = service.view_game(game_key, "bob")
        assert view["creator_move"] == {"committed": True, "move": None}
        assert view["opponent_move"] == {"committed": False, "move": None}
        own = service.view_game(game_key, "alice")
        assert own["creator_move"]["move"] == "rock"

    def test_view_reveals_after_finish(self, service, game_key):
        """Test both moves are visible once the round finishes."""
        service.make_move("alice", game_key, Move.ROCK)
        service.make_move("bob", game_key, Move.SCISSORS)
        view = service.view_game(game_key, "carol")
        assert view["creator_move"]["move"] == "rock"
        assert view["opponent_move"]["move"] == "scissors"


class TestEvents:
    """Tests for listener notification."""

    def test_events_in_order(self, service):
        """Test a full match emits its events in order."""
        events = []
        service.add_listener(events.append)
        key = service.create_game("alice", 100).game_key
        service.join_game("bob", key)
        service.make_move("alice", key, Move.ROCK)
        service.make_move("bob", key, Move.SCISSORS)
        service.reset_game("bob", key)
        assert [e.kind for e in events] == [
            EventKind.GAME_CREATED,
            EventKind.PLAYER_JOINED,
            EventKind.MOVE_COMMITTED,
            EventKind.MOVE_COMMITTED,
            EventKind.GAME_RESOLVED,
            EventKind.GAME_RESET,
        ]
        assert events[-1].round_number == 2

    def test_rejected_operation_emits_nothing(self, service, game_key):
        """Test a rejected operation notifies no listener."""
        events = []
        service.add_listener(events.append)
        with pytest.raises(InvalidPhaseError):
            service.join_game("carol", game_key)
        assert events == []

    def test_failing_listener_does_not_undo_write(self, service, game_key):
        """Test a raising listener does not roll back the write."""
        def broken(event):
            raise RuntimeError("listener down")

        service.add_listener(broken)
        record = service.make_move("alice", game_key, Move.ROCK)
        assert record.creator_move == Move.ROCK
        assert service.get_game(game_key).creator_move == Move.ROCK

    def test_remove_listener(self, service):
        """Test a removed listener receives nothing."""
        events = []
        service.add_listener(events.append)
        service.remove_listener(events.append)
        service.create_game("alice", 1)
        assert events == []

    def test_ledger_notified_once_per_round(self, service, game_key, ledger):
        """Test the ledger hears about each finished round once."""
        service.make_move("alice", game_key, Move.ROCK)
        assert ledger.notices == []
        service.make_move("bob", game_key, Move.PAPER)
        service.reset_game("alice", game_key)
        service.make_move("alice", game_key, Move.SCISSORS)
        service.make_move("bob", game_key, Move.PAPER)
        assert [(n.round_number, n.winner_id) for n in ledger.notices] == [
            (1, "bob"),
            (2, "alice"),
        ]


class TestSqliteBackedService:
    """The service works the same on SQLite storage."""

    @pytest.fixture
    def db_path(self):
        fd, path = tempfile.mkstemp(suffix=".db")
        os.close(fd)
        yield path
        os.unlink(path)

    def test_full_match_on_sqlite(self, db_path, ledger):
        """Test a full match persists to and reloads from SQLite."""
        service = GameService(store=SqliteGameStore(db_path), ledger=ledger)
        key = service.create_game("alice", 2 ** 64 - 1).game_key
        service.join_game("bob", key)
        service.make_move("alice", key, "rock")
        record = service.make_move("bob", key, "scissors")
        assert record.winner_id == "alice"

        reopened = GameService(store=SqliteGameStore(db_path), ledger=ledger)
        stored = reopened.get_game(key)
        assert stored == record
        assert stored.bet_amount == 2 ** 64 - 1
