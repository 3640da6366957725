"""Tests for settings loading."""

from arregistry.config import Settings


class TestSettings:
    def test_nested_env_override(self, monkeypatch) -> None:  # type: ignore[no-untyped-def]
        monkeypatch.setenv("ARREGISTRY_ARTIFACT_REGISTRY__PROJECT_ID", "my-project")
        monkeypatch.setenv("ARREGISTRY_ARTIFACT_REGISTRY__LOCATION", "europe-west1")
        monkeypatch.setenv("ARREGISTRY_PORT", "9090")

        cfg = Settings()

        assert cfg.artifact_registry.project_id == "my-project"
        assert cfg.artifact_registry.location == "europe-west1"
        assert cfg.port == 9090

    def test_defaults(self, monkeypatch) -> None:  # type: ignore[no-untyped-def]
        monkeypatch.delenv("ARREGISTRY_ARTIFACT_REGISTRY__LOCATION", raising=False)
        cfg = Settings()
        assert cfg.artifact_registry.location == "us"
        assert cfg.artifact_registry.page_size == 1000
