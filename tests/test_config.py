from roof_estimator.core.config import GOOGLE_GEOCODE_URL, GOOGLE_SOLAR_URL, Settings


class TestSettingsFromEnv:
    def test_defaults(self):
        s = Settings.from_env({})
        assert s.GOOGLE_MAPS_KEY is None
        assert s.PORT == 3000
        assert s.GEO_PROVIDER == "google"
        assert s.SOLAR_PROVIDER == "google"
        assert s.GEOCODE_URL == GOOGLE_GEOCODE_URL
        assert s.SOLAR_URL == GOOGLE_SOLAR_URL
        assert s.PROMETHEUS_ENABLED is True

    def test_reads_values(self):
        s = Settings.from_env({
            "GOOGLE_MAPS_KEY": "abc",
            "PORT": "8080",
            "GEO_PROVIDER": "MOCK",
            "PROMETHEUS_ENABLED": "false",
            "HTTP_TIMEOUT_SECONDS": "2.5",
        })
        assert s.GOOGLE_MAPS_KEY == "abc"
        assert s.PORT == 8080
        assert s.GEO_PROVIDER == "mock"
        assert s.PROMETHEUS_ENABLED is False
        assert s.HTTP_TIMEOUT_SECONDS == 2.5

    def test_empty_key_is_unset(self):
        assert Settings.from_env({"GOOGLE_MAPS_KEY": ""}).GOOGLE_MAPS_KEY is None

    def test_empty_port_falls_back(self):
        assert Settings.from_env({"PORT": ""}).PORT == 3000
