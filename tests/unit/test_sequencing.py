"""Tests for LatestResultGate."""

from __future__ import annotations

from scribe_engine.core.sequencing import LatestResultGate


class TestLatestResultGate:
    def test_sequences_increase(self) -> None:
        gate: LatestResultGate[str] = LatestResultGate()
        assert gate.next_sequence() == 1
        assert gate.next_sequence() == 2

    def test_newer_result_accepted(self) -> None:
        gate: LatestResultGate[str] = LatestResultGate()
        first = gate.next_sequence()
        second = gate.next_sequence()

        assert gate.offer(first, "old") is True
        assert gate.offer(second, "new") is True
        assert gate.latest == "new"
        assert gate.accepted_sequence == second

    def test_stale_result_discarded(self) -> None:
        gate: LatestResultGate[str] = LatestResultGate()
        first = gate.next_sequence()
        second = gate.next_sequence()

        # second request finishes first
        assert gate.offer(second, "new") is True
        assert gate.offer(first, "old") is False
        assert gate.latest == "new"

    def test_same_sequence_not_accepted_twice(self) -> None:
        gate: LatestResultGate[int] = LatestResultGate()
        seq = gate.next_sequence()
        assert gate.offer(seq, 1) is True
        assert gate.offer(seq, 2) is False
        assert gate.latest == 1

    def test_empty_gate(self) -> None:
        gate: LatestResultGate[int] = LatestResultGate()
        assert gate.latest is None
        assert gate.accepted_sequence == 0
