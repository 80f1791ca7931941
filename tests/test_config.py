import pytest

from country_sync.core.config import Settings, parse_list_from_env
from country_sync.infrastructure.countries_api.config import CountriesAPISettings


class TestParseListFromEnv:
    """Tests pour la fonction utilitaire parse_list_from_env."""

    def test_parse_direct(self):
        """Test avec une liste Python directe."""
        result = parse_list_from_env(["val1", "val2", "val3"], "test_field")
        assert result == ["val1", "val2", "val3"]

    def test_parse_comma_separated_with_spaces(self):
        """Test avec format virgules et espaces."""
        result = parse_list_from_env("  val1 , val2 , val3  ", "test_field")
        assert result == ["val1", "val2", "val3"]

    def test_parse_json_format(self):
        """Test avec format JSON."""
        result = parse_list_from_env('  ["val1", "val2"]  ', "test_field")
        assert result == ["val1", "val2"]

    def test_parse_empty_string(self):
        result = parse_list_from_env("   ", "test_field")
        assert result == []

    def test_parse_hosts_with_wildcards(self):
        """Test avec des hosts incluant des wildcards."""
        hosts = "localhost,127.0.0.1,*.example.com"
        result = parse_list_from_env(hosts, "TRUSTED_HOSTS")
        assert result == ["localhost", "127.0.0.1", "*.example.com"]

    def test_empty_values_filtered(self):
        """Test que les valeurs vides sont filtrées."""
        result = parse_list_from_env("val1,,val2,  ,val3", "test_field")
        assert result == ["val1", "val2", "val3"]

    def test_invalid_json_format(self):
        """Test avec format JSON invalide."""
        with pytest.raises(ValueError, match="Format JSON invalide pour test_field"):
            parse_list_from_env('["val1", "val2",]', "test_field")

    def test_invalid_type(self):
        with pytest.raises(ValueError, match="Valeur invalide pour test_field"):
            parse_list_from_env(123, "test_field")  # type: ignore


class TestSettings:
    """Tests du chargement de la configuration depuis l'environnement."""

    def test_lists_parsed_from_env(self, monkeypatch):
        monkeypatch.setenv("ALLOWED_ORIGINS", "http://localhost:3000,https://app.example.com")
        monkeypatch.setenv("TRUSTED_HOSTS", '["api.example.com"]')

        settings = Settings()

        assert settings.ALLOWED_ORIGINS == ["http://localhost:3000", "https://app.example.com"]
        assert settings.TRUSTED_HOSTS == ["api.example.com"]

    def test_database_uri_required(self, monkeypatch):
        """Sans SQLALCHEMY_DATABASE_URI, la configuration est invalide."""
        monkeypatch.delenv("SQLALCHEMY_DATABASE_URI", raising=False)

        with pytest.raises(ValueError):
            Settings(_env_file=None)

    def test_otel_resource_attributes(self, monkeypatch):
        monkeypatch.setenv("OTEL_SERVICE_NAME", "country-sync-test")
        monkeypatch.setenv("ENVIRONMENT", "test")
        monkeypatch.setenv("DEBUG", "true")

        attributes = Settings().OTEL_RESOURCE_ATTRIBUTES.attributes

        assert attributes["service.name"] == "country-sync-test"
        assert attributes["service.environment"] == "test"
        assert attributes["service.debug"] == "true"
        assert attributes["service.version"] == Settings().VERSION

    def test_api_prefix(self):
        settings = Settings()

        assert settings.get_api_prefix() == "/api/v1"
        assert settings.get_api_prefix("v2") == "/api/v2"


class TestCountriesAPISettings:
    def test_overrides_from_env(self, monkeypatch):
        monkeypatch.setenv("COUNTRIES_API_BASE_URL", "http://provider.test/countries")
        monkeypatch.setenv("COUNTRIES_API_RETRY_ATTEMPTS", "5")
        monkeypatch.setenv("COUNTRIES_API_RETRY_DELAY", "0.5")

        settings = CountriesAPISettings()

        assert str(settings.COUNTRIES_API_BASE_URL) == "http://provider.test/countries"
        assert settings.COUNTRIES_API_RETRY_ATTEMPTS == 5
        assert settings.COUNTRIES_API_RETRY_DELAY == 0.5
        assert settings.COUNTRIES_API_TIMEOUT == 30
