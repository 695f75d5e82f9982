"""Property-based tests for size aggregation invariants using Hypothesis.

These tests check properties that must hold for any tree shape and any
worker pool size, catching scheduling-dependent edge cases that fixed
example trees might miss.
"""

from __future__ import annotations

import os
import tempfile
import threading
from pathlib import Path

from hypothesis import given, settings, strategies as st

from dirsize.core.aggregator import Aggregator
from dirsize.core.error_collector import ErrorCollector
from dirsize.core.orchestrator import compute_directory_size
from dirsize.types.models import ErrorRecord, FileStat, TraversalRequest
from dirsize.utils.units import AdjustedSize, ByteUnit
from tests.fixtures.filesystem import write_file

# A tree is a list of (directory depth path, file size, extra hard links)
tree_entries = st.lists(
    st.tuples(
        st.lists(st.sampled_from(["a", "b", "c"]), max_size=3),
        st.integers(min_value=0, max_value=5000),
        st.integers(min_value=0, max_value=2),
    ),
    max_size=12,
)


def build_tree(root: Path, entries: list[tuple[list[str], int, int]]) -> tuple[int, int]:
    """Materialize generated entries and return the expected (total, count)."""
    expected_total = 0
    expected_count = 0
    for index, (parts, size, extra_links) in enumerate(entries):
        directory = root.joinpath(*parts)
        path = write_file(directory / f"f{index}", size)
        for link in range(extra_links):
            os.link(path, directory / f"f{index}_link{link}")
        links = extra_links + 1
        expected_total += (size // links) * links
        expected_count += links
    return expected_total, expected_count


class TestTraversalInvariants:
    """Property-based tests over real directory trees."""

    @settings(max_examples=25, deadline=None)
    @given(entries=tree_entries, threads=st.integers(min_value=1, max_value=8))
    def test_totals_match_tree(self, entries: list[tuple[list[str], int, int]], threads: int) -> None:
        """Property: totals equal the sum of adjusted sizes for any pool size."""
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            expected_total, expected_count = build_tree(root, entries)

            result = compute_directory_size(TraversalRequest(path=root, threads=threads, unit=ByteUnit.B))

            assert result.total_bytes == expected_total
            assert result.file_count == expected_count
            assert result.take_errors() is None

    @settings(max_examples=15, deadline=None)
    @given(entries=tree_entries)
    def test_symlinks_never_change_totals(self, entries: list[tuple[list[str], int, int]]) -> None:
        """Property: adding symlinks anywhere leaves totals untouched."""
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp) / "root"
            root.mkdir()
            expected_total, expected_count = build_tree(root, entries)
            (root / "self_loop").symlink_to(root, target_is_directory=True)
            (root / "dangling").symlink_to(root / "nowhere")
            for index, _ in enumerate(entries):
                (root / f"alias{index}").symlink_to(root / f"missing{index}")

            result = compute_directory_size(TraversalRequest(path=root, threads=4))

            assert (result.total_bytes, result.file_count) == (expected_total, expected_count)


class TestAccumulatorInvariants:
    """Property-based tests for the shared accumulators."""

    @settings(max_examples=30, deadline=None)
    @given(
        contributions=st.lists(st.integers(min_value=0, max_value=10**12), max_size=200),
        workers=st.integers(min_value=1, max_value=6),
    )
    def test_concurrent_adds_are_exact(self, contributions: list[int], workers: int) -> None:
        """Property: concurrent adds never lose a contribution or a count."""
        aggregator = Aggregator()
        chunks = [contributions[i::workers] for i in range(workers)]

        def add_all(chunk: list[int]) -> None:
            for value in chunk:
                aggregator.add(value)

        threads = [threading.Thread(target=add_all, args=(chunk,)) for chunk in chunks]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert aggregator.retire() == (sum(contributions), len(contributions))

    @settings(max_examples=30, deadline=None)
    @given(paths=st.lists(st.text(alphabet="abcxyz/", min_size=1, max_size=12), max_size=50))
    def test_collector_keeps_every_record(self, paths: list[str]) -> None:
        """Property: every appended record is taken exactly once."""
        collector = ErrorCollector()
        records = [ErrorRecord.unknown(Path(p)) for p in paths]
        for record in records:
            collector.append(record)

        taken = collector.take()

        assert (taken or []) == records
        assert collector.take() is None


class TestArithmeticInvariants:
    """Property-based tests for size arithmetic."""

    @given(length=st.integers(min_value=0, max_value=10**15), nlink=st.integers(min_value=-1, max_value=1000))
    def test_adjusted_size_bounds(self, length: int, nlink: int) -> None:
        """Property: adjusted size never exceeds length and links never exceed it summed."""
        file_stat = FileStat(length=length, nlink=nlink)

        assert file_stat.nlink >= 1
        assert 0 <= file_stat.adjusted_size <= length
        assert file_stat.adjusted_size * file_stat.nlink <= length

    @given(
        total=st.integers(min_value=0, max_value=10**18),
        unit=st.sampled_from(list(ByteUnit)),
    )
    def test_conversion_round_trips_through_factor(self, total: int, unit: ByteUnit) -> None:
        """Property: the converted value times the unit factor recovers the total."""
        size = AdjustedSize.from_bytes(total, unit)

        assert size.unit is unit
        assert abs(size.value * unit.factor - total) <= max(1.0, total * 1e-9)
