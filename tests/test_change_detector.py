"""
Test cases for ChangeDetector.
Covers first runs, idempotent reruns and changes of the build file or base images.
"""

import pytest
from conftest import FakeEngine
from imagerebuilder.build.change_detector import ChangeDetector
from imagerebuilder.build.digest_store import DigestStore
from imagerebuilder.build.hasher import FileHasher
from imagerebuilder.build.scanner import BaseImageScanner

BASE_DIGEST = 'Digest: sha256:' + 'a' * 64
BASE_RECORD = "base_1.0_digest.txt"
BUILD_RECORD = "containerfile-digest.txt"


@pytest.fixture
def make_detector(workdir):
    """Build a detector storing everything in the working directory"""
    def _make(engine):
        return ChangeDetector(
            engine=engine,
            scanner=BaseImageScanner(),
            hasher=FileHasher(),
            build_file_store=DigestStore(workdir),
            image_store=DigestStore(workdir)
        )
    return _make


class TestFirstRun:
    """Test runs without any stored records"""

    def test_base_image_and_scratch(self, make_detector, fake_engine, dockerfile, workdir):
        """First run fingerprints base:1.0, skips scratch and requires a rebuild"""
        decision = make_detector(fake_engine).detect_changes("Dockerfile")

        assert decision.required is True
        assert decision.should_build is True
        assert fake_engine.pulled == ["base:1.0"]
        assert [r.image_reference for r in decision.base_images] == ["base:1.0"]
        assert (workdir / BASE_RECORD).read_text() == BASE_DIGEST + "\n"
        assert not (workdir / "scratch_digest.txt").exists()
        assert (workdir / BUILD_RECORD).is_file()

    def test_build_file_record_content(self, make_detector, fake_engine, dockerfile, workdir):
        make_detector(fake_engine).detect_changes("Dockerfile")

        expected = FileHasher().compute_file_fingerprint("Dockerfile")
        assert (workdir / BUILD_RECORD).read_text() == expected + "\n"
        assert expected.endswith("  Dockerfile")


class TestRerun:
    """Test consecutive runs"""

    def test_idempotent_after_baseline(self, make_detector, fake_engine, dockerfile):
        detector = make_detector(fake_engine)
        detector.detect_changes("Dockerfile")

        second = detector.detect_changes("Dockerfile")
        third = detector.detect_changes("Dockerfile")

        assert second.required is False
        assert third.required is False
        assert second.should_build is False

    def test_unchanged_image_record_is_byte_identical(self, make_detector, fake_engine, dockerfile, workdir):
        detector = make_detector(fake_engine)
        detector.detect_changes("Dockerfile")
        before = (workdir / BASE_RECORD).read_bytes()

        decision = detector.detect_changes("Dockerfile")

        assert (workdir / BASE_RECORD).read_bytes() == before
        assert decision.base_images[0].changed is False

    def test_unchanged_build_file_record_not_rewritten(self, make_detector, fake_engine, dockerfile, workdir):
        detector = make_detector(fake_engine)
        detector.detect_changes("Dockerfile")

        (workdir / BUILD_RECORD).write_text("sentinel  Dockerfile\n")
        # Sentinel differs, so the record is rewritten once
        assert detector.detect_changes("Dockerfile").required is True
        assert "sentinel" not in (workdir / BUILD_RECORD).read_text()

        mtime = (workdir / BUILD_RECORD).stat().st_mtime_ns
        detector.detect_changes("Dockerfile")
        assert (workdir / BUILD_RECORD).stat().st_mtime_ns == mtime

    def test_build_file_change_triggers_once(self, make_detector, fake_engine, dockerfile, workdir):
        detector = make_detector(fake_engine)
        detector.detect_changes("Dockerfile")

        dockerfile.write_text(dockerfile.read_text() + "RUN echo changed\n")
        changed = detector.detect_changes("Dockerfile")
        again = detector.detect_changes("Dockerfile")

        assert changed.required is True
        assert changed.build_definition.changed is True
        assert again.required is False
        assert (workdir / BUILD_RECORD).read_text().rstrip("\n") == \
            FileHasher().compute_file_fingerprint("Dockerfile")

    def test_renamed_build_file_invalidates_record(self, make_detector, fake_engine, dockerfile, workdir):
        detector = make_detector(fake_engine)
        detector.detect_changes("Dockerfile")

        dockerfile.rename(workdir / "Containerfile")

        assert detector.detect_changes("Containerfile").required is True

    def test_new_base_image_digest(self, make_detector, fake_engine, dockerfile, workdir):
        detector = make_detector(fake_engine)
        detector.detect_changes("Dockerfile")

        fake_engine.digests['base:1.0'] = 'Digest: sha256:' + 'b' * 64
        decision = detector.detect_changes("Dockerfile")

        assert decision.required is True
        assert decision.build_definition.changed is False
        assert decision.get_changed_images() == ["base:1.0"]
        assert (workdir / BASE_RECORD).read_text() == 'Digest: sha256:' + 'b' * 64 + "\n"


class TestMultipleImages:

    @pytest.fixture
    def multi_stage(self, workdir):
        (workdir / "Dockerfile").write_text(
            "FROM golang:1.22 AS builder\n"
            "FROM alpine:3.19\n"
            "FROM debian:12\n"
        )

    @pytest.fixture
    def engine(self):
        return FakeEngine({
            'golang:1.22': 'Digest: sha256:1',
            'alpine:3.19': 'Digest: sha256:2',
            'debian:12': 'Digest: sha256:3',
        })

    def test_no_short_circuit(self, make_detector, engine, multi_stage, workdir):
        """Every image is pulled and stored even after the first change"""
        detector = make_detector(engine)
        detector.detect_changes("Dockerfile")

        engine.digests = {
            'golang:1.22': 'Digest: sha256:10',
            'alpine:3.19': 'Digest: sha256:20',
            'debian:12': 'Digest: sha256:3',
        }
        engine.pulled.clear()
        decision = detector.detect_changes("Dockerfile")

        assert engine.pulled == ["golang:1.22", "alpine:3.19", "debian:12"]
        assert decision.get_changed_images() == ["golang:1.22", "alpine:3.19"]
        assert (workdir / "golang_1.22_digest.txt").read_text() == "Digest: sha256:10\n"
        assert (workdir / "alpine_3.19_digest.txt").read_text() == "Digest: sha256:20\n"
        assert detector.detect_changes("Dockerfile").required is False

    def test_duplicates_pulled_twice(self, make_detector, workdir):
        (workdir / "Dockerfile").write_text("FROM alpine:3.19\nFROM alpine:3.19\n")
        engine = FakeEngine({'alpine:3.19': 'Digest: sha256:2'})

        make_detector(engine).detect_changes("Dockerfile")

        assert engine.pulled == ["alpine:3.19", "alpine:3.19"]

    def test_colliding_references_share_a_record(self, make_detector, workdir):
        """org/app:1 and org:app/1 sanitise to one record and keep overwriting it"""
        (workdir / "Dockerfile").write_text("FROM org/app:1\nFROM org:app/1\n")
        engine = FakeEngine({'org/app:1': 'Digest: sha256:x', 'org:app/1': 'Digest: sha256:y'})
        detector = make_detector(engine)

        detector.detect_changes("Dockerfile")
        second = detector.detect_changes("Dockerfile")

        assert second.get_changed_images() == ["org/app:1", "org:app/1"]
        assert (workdir / "org_app_1_digest.txt").read_text() == "Digest: sha256:y\n"


class TestFailedPull:
    """A failed pull errs toward rebuilding"""

    def test_failed_pull_always_requires_rebuild(self, make_detector, dockerfile, workdir):
        engine = FakeEngine({})  # every pull fails
        detector = make_detector(engine)

        detector.detect_changes("Dockerfile")
        decision = detector.detect_changes("Dockerfile")

        assert decision.required is True
        assert decision.build_definition.changed is False
        assert (workdir / BASE_RECORD).read_text() == "\n"


class TestForced:

    def test_forced_with_unchanged_digests_builds(self, make_detector, fake_engine, dockerfile):
        detector = make_detector(fake_engine)
        detector.detect_changes("Dockerfile")

        decision = detector.detect_changes("Dockerfile", forced=True)

        assert decision.required is False
        assert decision.forced is True
        assert decision.should_build is True
