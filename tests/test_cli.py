"""Test the keystone-azure CLI against the filesystem backend."""

import pytest
import yaml
from typer.testing import CliRunner

from keystone_azure.cli import app


@pytest.fixture
def runner():
    """Create a CliRunner for in-process testing."""
    return CliRunner()


@pytest.fixture
def store_dir(tmp_path):
    return tmp_path / "store"


@pytest.fixture
def config_file(tmp_path, store_dir):
    """Options file pointing the adapter at a local directory."""
    path = tmp_path / "keystone-azure.yaml"
    path.write_text(yaml.safe_dump({
        "azure": {
            "container": "media",
            "provider": "fs",
            "root": str(store_dir),
            "account_name": "acct",
            "account_key": "should-not-print",
        },
        "schema": {"etag": True},
    }))
    return path


@pytest.fixture
def local_file(tmp_path):
    path = tmp_path / "photo.jpg"
    path.write_bytes(b"\xff\xd8\xff")
    return path


class TestUpload:

    def test_upload_with_name(self, runner, config_file, local_file, store_dir):
        """Upload stores the file under the requested name."""
        result = runner.invoke(app, ["upload", str(local_file), "--name", "photo1.jpg", "--config", str(config_file)])

        assert result.exit_code == 0, result.output
        assert "Uploaded" in result.output
        assert (store_dir / "media" / "photo1.jpg").read_bytes() == b"\xff\xd8\xff"

    def test_upload_random_name(self, runner, config_file, local_file, store_dir):
        """Without --name a random name with the same extension is used."""
        result = runner.invoke(app, ["upload", str(local_file), "--config", str(config_file)])

        assert result.exit_code == 0, result.output
        stored = list((store_dir / "media").iterdir())
        assert len(stored) == 1
        assert stored[0].suffix == ".jpg"

    def test_upload_missing_container(self, runner, tmp_path, local_file):
        """Configuration errors exit with status 1."""
        config = tmp_path / "empty.yaml"
        config.write_text("azure: {}\n")

        result = runner.invoke(app, ["upload", str(local_file), "--config", str(config)])

        assert result.exit_code == 1
        assert "missing container" in result.output


class TestUrl:

    def test_url(self, runner, config_file, store_dir):
        """URL points at the blob in the configured container."""
        result = runner.invoke(app, ["url", "photo1.jpg", "--config", str(config_file)])

        assert result.exit_code == 0, result.output
        expected = (store_dir / "media" / "photo1.jpg").resolve().as_uri()
        assert expected in result.output.replace("\n", "")


class TestDelete:

    def test_delete(self, runner, config_file, local_file, store_dir):
        """Delete removes an uploaded blob."""
        runner.invoke(app, ["upload", str(local_file), "--name", "photo1.jpg", "--config", str(config_file)])

        result = runner.invoke(app, ["delete", "photo1.jpg", "--config", str(config_file)])

        assert result.exit_code == 0, result.output
        assert "Deleted photo1.jpg" in result.output
        assert not (store_dir / "media" / "photo1.jpg").exists()

    def test_delete_from_other_container(self, runner, config_file, local_file, store_dir):
        """--container targets the container the file was stored in."""
        old = store_dir / "old-bucket"
        old.mkdir(parents=True)
        (old / "x.png").write_bytes(b"x")

        result = runner.invoke(app, ["delete", "x.png", "--container", "old-bucket", "--config", str(config_file)])

        assert result.exit_code == 0, result.output
        assert not (old / "x.png").exists()

    def test_delete_missing_blob(self, runner, config_file):
        """Backend errors exit with status 1 and a hint."""
        result = runner.invoke(app, ["delete", "nope.jpg", "--config", str(config_file)])

        assert result.exit_code == 1
        assert "Blob not found" in result.output
        assert "container exists" in result.output


class TestShowConfig:

    def test_show_config_masks_secrets(self, runner, config_file):
        """Resolved settings are shown without secrets."""
        result = runner.invoke(app, ["show-config", "--config", str(config_file)])

        assert result.exit_code == 0, result.output
        assert "media" in result.output
        assert "should-not-print" not in result.output

    def test_schema_list_is_configuration_error(self, runner, tmp_path):
        """A schema that is not a mapping exits with status 1."""
        config = tmp_path / "bad-schema.yaml"
        config.write_text("azure:\n  container: media\n  provider: fs\n  root: store\nschema:\n  - etag\n")

        result = runner.invoke(app, ["show-config", "--config", str(config)])

        assert result.exit_code == 1
        assert "Schema must be a mapping" in result.output
