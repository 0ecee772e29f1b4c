"""Tests for typerank.app – configuration and session recording."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from typerank import app
from typerank.core.history import HistoryRepository
from typerank.core.session import TypingSession
from typerank.core.storage import MemoryBlobStore


class TestDataDir:
    def test_default_under_home(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
        monkeypatch.delenv("TYPERANK_HOME", raising=False)
        monkeypatch.setattr(Path, "home", lambda: tmp_path)
        assert app.data_dir() == tmp_path / ".typerank"

    def test_env_override(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
        monkeypatch.setenv("TYPERANK_HOME", str(tmp_path / "custom"))
        assert app.data_dir() == tmp_path / "custom"


class TestConfigureLogging:
    def test_calls_basic_config(self, monkeypatch: pytest.MonkeyPatch):
        calls = []
        monkeypatch.setattr(logging, "basicConfig", lambda **kw: calls.append(kw))
        app.configure_logging(logging.DEBUG)
        assert calls[0]["level"] == logging.DEBUG
        assert "%(name)s" in calls[0]["format"]


class TestCreateHistory:
    def test_file_backed(self, tmp_path: Path, clock):
        history = app.create_history(tmp_path)
        assert isinstance(history, HistoryRepository)
        assert history.all() == []


class TestRecordSession:
    @pytest.fixture()
    def history(self, clock) -> HistoryRepository:
        return HistoryRepository(MemoryBlobStore(), clock=clock)

    def _play(self, session: TypingSession, clock) -> None:
        session.start()
        while session.state == "playing":
            question = session.current_question()
            for end in range(1, len(question.text) + 1):
                session.update_input(question.text[:end])
            clock.advance(3)
            session.submit_answer()

    def test_unfinished_session_not_saved(self, repository, clock, history):
        session = TypingSession("count", 2, repository=repository, clock=clock)
        session.start()
        assert app.record_session(session, history) is None
        assert history.all() == []

    def test_finished_session_saved(self, repository, clock, history):
        session = TypingSession("count", 2, repository=repository, clock=clock)
        self._play(session, clock)
        evaluation = app.record_session(session, history)
        assert evaluation is not None
        record = history.all()[0]
        assert record.input_method == "keyboard"
        assert record.mode == "count"
        assert record.mode_value == 2
        assert record.result == session.total_result
        assert record.rank_evaluation == evaluation

    def test_paste_like_input_classified(self, repository, clock, history):
        session = TypingSession("count", 2, "medium", repository=repository, clock=clock)
        session.start()
        while session.state == "playing":
            clock.advance(3)
            session.update_input(session.current_question().text)
            session.submit_answer()
        app.record_session(session, history)
        # 2 events for 20 characters lands in the voice band
        assert history.all()[0].input_method == "voice"

    def test_save_failure(self, repository, clock):
        class ReadOnlyStore(MemoryBlobStore):
            def set(self, key: str, value: str) -> None:
                raise OSError("read-only")

        history = HistoryRepository(ReadOnlyStore(), clock=clock)
        session = TypingSession("count", 1, repository=repository, clock=clock)
        self._play(session, clock)
        assert app.record_session(session, history) is None


class TestNewSession:
    def test_uses_bundled_corpus(self):
        session = app.new_session("count", 4, "medium")
        assert len(session.questions) == 4
        assert all(q.difficulty == "medium" for q in session.questions)
