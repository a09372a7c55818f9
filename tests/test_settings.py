"""Testes do carregador e do validador de configuração."""
import textwrap

import pytest

from config.settings import (
    ConfigLoader,
    ConfigValidator,
    ConfigurationError,
    MarketSettings,
    deep_merge,
    get_config_value,
    get_default_config,
    prepare_config
)
from core.pricing import CombinedConstantStep, ConstantIncrement, Unchanged


def write_yaml(tmp_path, content: str):
    path = tmp_path / "config.yaml"
    path.write_text(textwrap.dedent(content), encoding='utf-8')
    return path


class TestConfigLoader:

    def test_missing_file_uses_defaults(self, tmp_path):
        loader = ConfigLoader(str(tmp_path / "nao_existe.yaml"), env_file=str(tmp_path / ".env"))
        assert loader.load() == get_default_config()

    def test_yaml_merged_with_defaults(self, tmp_path):
        path = write_yaml(tmp_path, """
            market:
              journal_size: 50
              exchanges:
                NYSE:
                  policy:
                    kind: constant_increment
                    step: 3
        """)
        config = ConfigLoader(str(path), env_file=str(tmp_path / ".env")).load()

        assert config['market']['journal_size'] == 50
        assert config['market']['default_policy'] == {'kind': 'unchanged'}
        assert config['system']['log_level'] == 'INFO'

    def test_env_substitution(self, tmp_path, monkeypatch):
        monkeypatch.setenv("MARKET_TEST_LEVEL", "DEBUG")
        monkeypatch.delenv("MARKET_TEST_SIZE", raising=False)
        path = write_yaml(tmp_path, """
            system:
              log_level: ${MARKET_TEST_LEVEL:INFO}
              log_dir: logs/${MARKET_TEST_LEVEL}
            market:
              journal_size: ${MARKET_TEST_SIZE:25}
        """)
        config = ConfigLoader(str(path), env_file=str(tmp_path / ".env")).load()

        assert config['system']['log_level'] == 'DEBUG'
        assert config['system']['log_dir'] == 'logs/DEBUG'
        assert config['market']['journal_size'] == 25

    def test_dotenv_file_is_loaded(self, tmp_path, monkeypatch):
        monkeypatch.setenv("MARKET_DOTENV_ENV", "placeholder")
        monkeypatch.delenv("MARKET_DOTENV_ENV")
        env_file = tmp_path / ".env"
        env_file.write_text("MARKET_DOTENV_ENV=staging\n", encoding='utf-8')
        path = write_yaml(tmp_path, """
            system:
              environment: ${MARKET_DOTENV_ENV:development}
        """)

        config = ConfigLoader(str(path), env_file=str(env_file)).load()
        assert config["system"]["environment"] == "staging"

    def test_invalid_policy_raises(self, tmp_path):
        path = write_yaml(tmp_path, """
            market:
              exchanges:
                NYSE:
                  policy:
                    kind: constant_increment
                    step: 0
        """)
        with pytest.raises(ConfigurationError) as exc_info:
            ConfigLoader(str(path), env_file=str(tmp_path / ".env")).load()
        assert "market.exchanges.NYSE.policy" in str(exc_info.value)

    def test_malformed_yaml_raises(self, tmp_path):
        path = write_yaml(tmp_path, "market: [unclosed\n")
        with pytest.raises(ConfigurationError):
            ConfigLoader(str(path), env_file=str(tmp_path / ".env")).load()

    def test_get_section_and_reload(self, tmp_path):
        path = write_yaml(tmp_path, "market:\n  journal_size: 7\n")
        loader = ConfigLoader(str(path), env_file=str(tmp_path / ".env"))
        assert loader.get_section('market')['journal_size'] == 7

        path.write_text("market:\n  journal_size: 8\n", encoding='utf-8')
        assert loader.reload()['market']['journal_size'] == 8


class TestConfigValidator:

    def test_default_config_is_valid(self):
        assert ConfigValidator.validate_config(get_default_config()) == []

    def test_collects_all_errors(self):
        config = deep_merge(get_default_config(), {
            'system': {'log_level': 'VERBOSE'},
            'market': {
                'default_policy': {'kind': 'random'},
                'journal_size': 0
            }
        })
        errors = ConfigValidator.validate_config(config)
        assert len(errors) == 3

    def test_missing_sections(self):
        errors = ConfigValidator.validate_config({})
        assert errors == ["Seção obrigatória ausente: system", "Seção obrigatória ausente: market"]

    def test_prepare_config_raises(self):
        with pytest.raises(ConfigurationError):
            prepare_config({'market': {'journal_size': -1}})


class TestMarketSettings:

    def test_policy_for_configured_exchange(self):
        settings = MarketSettings(prepare_config({
            'market': {
                'default_policy': {'kind': 'constant_increment', 'step': 1},
                'exchanges': {
                    'NYSE': {'policy': {'kind': 'combined_constant_step', 'increment': 2, 'decrement': 1}},
                    'B3.SP': {'policy': {'kind': 'unchanged'}}
                }
            }
        }))

        assert settings.policy_for('NYSE') == CombinedConstantStep(increment=2, decrement=1)
        assert settings.policy_for('B3.SP') == Unchanged()
        assert settings.policy_for('LSE') == ConstantIncrement(step=1)

    def test_defaults(self):
        settings = MarketSettings(get_default_config())
        assert settings.journal_size == 10000
        assert settings.log_level == 'INFO'
        assert settings.default_policy() == Unchanged()

    def test_get_config_value(self):
        config = get_default_config()
        assert get_config_value(config, 'market.journal_size') == 10000
        assert get_config_value(config, 'market.nope', 'x') == 'x'


def test_deep_merge_does_not_mutate_base():
    base = {'a': {'b': 1, 'c': 2}}
    merged = deep_merge(base, {'a': {'b': 9}})
    assert merged == {'a': {'b': 9, 'c': 2}}
    assert base == {'a': {'b': 1, 'c': 2}}
