import pytest

from ticket_inventory.platform.config.core_setting import Settings


@pytest.mark.unit
class TestSettings:
    def test_trailing_slash_is_stripped(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv('TICKETING_API_BASE_URL', 'http://api.example.com/')

        assert Settings().TICKETING_API_BASE_URL == 'http://api.example.com'

    @pytest.mark.parametrize('raw', ['0', '-1'])
    def test_non_positive_timeout_disables_deadline(
        self, monkeypatch: pytest.MonkeyPatch, raw: str
    ) -> None:
        monkeypatch.setenv('PERSISTENCE_TIMEOUT_SECONDS', raw)

        assert Settings().PERSISTENCE_TIMEOUT_SECONDS is None
