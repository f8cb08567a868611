"""Test environment credential and container lookup."""

import os

from keystone_azure.env_manager import apply_container_fallback, read_env_credentials


class TestReadEnvCredentials:
    """Test reading AZURE_STORAGE_* credentials."""

    def test_connection_string_wins(self):
        """Connection string is preferred over account and key."""
        creds = read_env_credentials({
            "AZURE_STORAGE_CONNECTION_STRING": "UseDevelopmentStorage=true",
            "AZURE_STORAGE_ACCOUNT": "acct",
            "AZURE_STORAGE_ACCESS_KEY": "a2V5",
        })

        assert creds == {"connection_string": "UseDevelopmentStorage=true"}

    def test_account_and_key(self):
        """Account and key are returned together."""
        creds = read_env_credentials({"AZURE_STORAGE_ACCOUNT": "acct", "AZURE_STORAGE_ACCESS_KEY": "a2V5"})

        assert creds == {"account_name": "acct", "account_key": "a2V5"}

    def test_account_without_key(self):
        """Account alone is passed on without a key."""
        assert read_env_credentials({"AZURE_STORAGE_ACCOUNT": "acct"}) == {"account_name": "acct"}

    def test_key_without_account_ignored(self):
        """A key with no account is useless."""
        assert read_env_credentials({"AZURE_STORAGE_ACCESS_KEY": "a2V5"}) == {}

    def test_empty_values_ignored(self):
        """Empty variables count as unset."""
        assert read_env_credentials({"AZURE_STORAGE_CONNECTION_STRING": ""}) == {}

    def test_defaults_to_process_environment(self, monkeypatch):
        """os.environ is read when no mapping is given."""
        monkeypatch.setenv("AZURE_STORAGE_CONNECTION_STRING", "UseDevelopmentStorage=true")

        assert read_env_credentials() == {"connection_string": "UseDevelopmentStorage=true"}


class TestContainerFallback:
    """Test the generic container fallback."""

    def test_fills_missing_generic_container(self):
        """Env container lands in the generic bag."""
        options = {"azure": {}}

        apply_container_fallback(options, {"AZURE_STORAGE_CONTAINER": "media"})

        assert options["container"] == "media"
        assert options["azure"] == {}

    def test_keeps_existing_container(self):
        """A configured generic container is not replaced."""
        options = {"container": "mine"}

        apply_container_fallback(options, {"AZURE_STORAGE_CONTAINER": "media"})

        assert options["container"] == "mine"

    def test_unset_env_writes_none(self):
        """Without the variable the generic field ends up None."""
        options = {}

        apply_container_fallback(options, {})

        assert options["container"] is None

    def test_reads_process_environment(self, monkeypatch):
        """os.environ is read when no mapping is given."""
        monkeypatch.setenv("AZURE_STORAGE_CONTAINER", "media")
        options = {}

        apply_container_fallback(options)

        assert options["container"] == os.environ["AZURE_STORAGE_CONTAINER"]
