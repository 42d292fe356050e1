"""Tests for job enumeration and round-robin bucket assignment."""

from collections import Counter
from pathlib import Path
from unittest.mock import Mock

import pytest

from transcode_dispatch.core import (
    DispatchError,
    FFmpegCommandBuilder,
    ResolverError,
    UnknownProfileError,
    build_jobs,
    discover_files,
    enumerate_jobs,
    get_profile,
)


@pytest.fixture
def resolver():
    return FFmpegCommandBuilder()


@pytest.fixture
def profile():
    return get_profile("320")


def test_discover_files_is_lexicographic_and_skips_directories(make_input_dir) -> None:
    input_dir = make_input_dir(["c", "a", "b"])
    (input_dir / "nested").mkdir()

    files = discover_files(input_dir)

    assert [f.name for f in files] == ["a.flac", "b.flac", "c.flac"]


def test_discover_files_missing_directory(tmp_path) -> None:
    with pytest.raises(DispatchError):
        discover_files(tmp_path / "input")


def test_three_files_two_workers_scenario(make_input_dir, tmp_path, resolver, profile) -> None:
    make_input_dir(["a", "b", "c"])

    jobs, worker_count = build_jobs(tmp_path / "input", profile, tmp_path / "out", 2, resolver)

    assert worker_count == 2
    assert [(j.work_id, j.bucket_id, j.display_name) for j in jobs] == [
        (0, 0, "a"),
        (1, 1, "b"),
        (2, 0, "c"),
    ]


@pytest.mark.parametrize(("file_count", "parallelism"), [(1, 8), (5, 2), (7, 3), (8, 4), (3, 16)])
def test_round_robin_partition_is_balanced(make_input_dir, tmp_path, resolver, profile, file_count, parallelism) -> None:
    make_input_dir([f"track{i:02d}" for i in range(file_count)])

    jobs, worker_count = build_jobs(tmp_path / "input", profile, tmp_path / "out", parallelism, resolver)

    assert worker_count == min(parallelism, file_count)
    assert sorted(j.work_id for j in jobs) == list(range(file_count))
    assert all(0 <= j.bucket_id < worker_count for j in jobs)

    sizes = Counter(j.bucket_id for j in jobs)
    assert len(sizes) == worker_count
    assert max(sizes.values()) - min(sizes.values()) <= 1


def test_enumeration_is_idempotent(make_input_dir, tmp_path, resolver, profile) -> None:
    make_input_dir(["beta", "alpha", "gamma", "delta"])

    first, _ = build_jobs(tmp_path / "input", profile, tmp_path / "out", 3, resolver)
    second, _ = build_jobs(tmp_path / "input", profile, tmp_path / "out", 3, resolver)

    def triples(jobs):
        return [(j.work_id, j.bucket_id, j.display_name) for j in jobs]

    assert triples(first) == triples(second)


def test_empty_input_creates_output_dir_and_no_jobs(make_input_dir, tmp_path, resolver, profile) -> None:
    make_input_dir([])
    output_dir = tmp_path / "out"

    jobs, worker_count = build_jobs(tmp_path / "input", profile, output_dir, 8, resolver)

    assert jobs == []
    assert worker_count == 0
    assert output_dir.is_dir()


def test_invocation_targets_output_dir_with_profile_extension(make_input_dir, tmp_path, resolver) -> None:
    make_input_dir(["song"])
    profile = get_profile("16bit")

    jobs, _ = build_jobs(tmp_path / "input", profile, tmp_path / "out", 4, resolver)

    command = jobs[0].invocation.command
    assert command[0] == "ffmpeg"
    assert command[-1] == str(tmp_path / "out" / "song.flac")
    assert "-sample_fmt" in command


def test_resolver_failure_aborts_without_partial_list(make_input_dir, tmp_path, profile) -> None:
    files = discover_files(make_input_dir(["a", "b", "c"]))
    resolver = Mock()
    resolver.resolve.side_effect = [Mock(), ResolverError("unsupported", file_path=files[1])]

    with pytest.raises(ResolverError):
        enumerate_jobs(files, profile, 2, tmp_path / "out", resolver)


def test_unknown_profile_is_fatal() -> None:
    with pytest.raises(UnknownProfileError, match="Unknown profile 'flac24'"):
        get_profile("flac24")


def test_enumerate_rejects_files_without_workers(make_input_dir, tmp_path, resolver, profile) -> None:
    files = discover_files(make_input_dir(["a"]))

    with pytest.raises(DispatchError):
        enumerate_jobs(files, profile, 0, tmp_path / "out", resolver)


def test_source_file_and_display_name(make_input_dir, tmp_path, resolver, profile) -> None:
    input_dir = make_input_dir(["Artist - Title"])

    jobs, _ = build_jobs(input_dir, profile, tmp_path / "out", 1, resolver)

    assert jobs[0].display_name == "Artist - Title"
    assert jobs[0].source_file == Path(input_dir / "Artist - Title.flac")
