"""Tests for ArtifactRelocator."""

import pytest

from godot_ci.core.errors import RelocationFailed
from godot_ci.packaging.relocator import ArtifactRelocator
from tests.fakes import make_zip


class TestArchivedRelocation:
    """Relocation of zipped artifacts."""

    def test_archives_copied_to_export_path(self, make_config, make_artifact):
        config = make_config()
        artifact = make_artifact(config, "Linux", "Linux/X11", "game.x86_64")
        artifact.archive_path = make_zip(
            config.archives_path / "Linux.zip", {"game.x86_64": b"x"}
        )

        skipped = ArtifactRelocator(config).relocate([artifact], move_archived=True)

        assert skipped == []
        assert artifact.archive_path == config.export_path / "Linux.zip"
        assert artifact.archive_path.is_file()
        assert (config.archives_path / "Linux.zip").is_file()

    def test_missing_archive_is_skipped_with_warning(
        self, make_config, make_artifact, caplog
    ):
        config = make_config()
        archived = make_artifact(config, "Windows", "Windows Desktop", "game.exe")
        archived.archive_path = make_zip(
            config.archives_path / "Windows.zip", {"game.exe": b"x"}
        )
        not_archived = make_artifact(config, "Linux", "Linux/X11", "game.x86_64")

        with caplog.at_level("WARNING"):
            skipped = ArtifactRelocator(config).relocate(
                [not_archived, archived], move_archived=True
            )

        assert skipped == ["Linux"]
        assert "not archived" in caplog.text
        assert sorted(p.name for p in config.export_path.iterdir()) == ["Windows.zip"]
        assert not_archived.archive_path is None
        assert archived.archive_path == config.export_path / "Windows.zip"

    def test_preset_export_path_destination(self, make_config, make_artifact, project_dir):
        config = make_config(use_preset_export_path=True)
        artifact = make_artifact(config, "Windows", "Windows Desktop", "dist/win/game.exe")
        artifact.archive_path = make_zip(
            config.archives_path / "Windows.zip", {"game.exe": b"x"}
        )

        ArtifactRelocator(config).relocate([artifact], move_archived=True)

        assert artifact.archive_path == project_dir / "dist" / "win" / "Windows.zip"
        assert artifact.archive_path.is_file()

    def test_copy_failures_reported_after_all_tasks(self, make_config, make_artifact):
        config = make_config()
        good = make_artifact(config, "Good", "Linux/X11", "good.x86_64")
        good.archive_path = make_zip(config.archives_path / "Good.zip", {"a": b"x"})
        broken = make_artifact(config, "Broken", "Linux/X11", "broken.x86_64")
        broken.archive_path = config.archives_path / "vanished.zip"

        with pytest.raises(RelocationFailed, match="Broken") as exc_info:
            ArtifactRelocator(config).relocate([broken, good], move_archived=True)

        assert exc_info.value.context["failed_presets"] == ["Broken"]
        assert (config.export_path / "Good.zip").is_file()
        assert good.archive_path == config.export_path / "Good.zip"


class TestRawRelocation:
    """Relocation of unzipped build directories."""

    def test_build_directory_copied_and_paths_updated(self, make_config, make_artifact):
        config = make_config()
        artifact = make_artifact(
            config,
            "Linux",
            "Linux/X11",
            "game.x86_64",
            files={"game.x86_64": b"bin", "data/game.pck": b"pck"},
        )
        scratch = artifact.directory

        skipped = ArtifactRelocator(config).relocate([artifact], move_archived=False)

        assert skipped == []
        assert artifact.directory == config.export_path / "Linux"
        assert artifact.executable_path == config.export_path / "Linux" / "game.x86_64"
        assert artifact.executable_path.read_bytes() == b"bin"
        assert (artifact.directory / "data" / "game.pck").is_file()
        assert (scratch / "game.x86_64").is_file()

    def test_every_artifact_relocated(self, make_config, make_artifact):
        config = make_config()
        artifacts = [
            make_artifact(
                config, f"Preset {i}", "Linux/X11", f"g{i}.x86_64", files={f"g{i}": b""}
            )
            for i in range(5)
        ]

        ArtifactRelocator(config).relocate(artifacts, move_archived=False)

        assert sorted(p.name for p in config.export_path.iterdir()) == [
            f"Preset {i}" for i in range(5)
        ]
        assert all(a.directory.parent == config.export_path for a in artifacts)
