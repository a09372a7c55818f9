# config/settings.py
"""
Carregador de configurações do simulador de mercado.
"""
import os
import re
import yaml
import logging
from pathlib import Path
from typing import Dict, Any, List, Optional
from functools import lru_cache

from dotenv import load_dotenv

from core.exceptions import InvalidArgument
from core.pricing.policies import PricingPolicy, Unchanged, parse_policy

logger = logging.getLogger(__name__)

LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')


class ConfigurationError(Exception):
    """Configuração inválida ou ilegível."""
    pass


class ConfigValidator:
    """Valida as seções system e market, incluindo as políticas de preço."""

    @staticmethod
    def validate_config(config: Dict[str, Any]) -> List[str]:
        """
        Valida a configuração e retorna lista de erros.

        Returns:
            Lista de mensagens de erro (vazia se tudo OK)
        """
        errors = []

        for section in ('system', 'market'):
            if not isinstance(config.get(section), dict):
                errors.append(f"Seção obrigatória ausente: {section}")

        system = config.get('system', {})
        if isinstance(system, dict):
            level = str(system.get('log_level', 'INFO')).upper()
            if level not in LOG_LEVELS:
                errors.append(f"system.log_level inválido: {system.get('log_level')}")

        market = config.get('market', {})
        if isinstance(market, dict):
            # Políticas de preço
            default_policy = market.get('default_policy')
            if default_policy is not None:
                errors.extend(ConfigValidator._validate_policy('market.default_policy', default_policy))

            exchanges = market.get('exchanges') or {}
            if not isinstance(exchanges, dict):
                errors.append("market.exchanges deve ser um dicionário")
            else:
                for name, exchange_cfg in exchanges.items():
                    if not str(name).strip():
                        errors.append("market.exchanges contém nome de bolsa vazio")
                    if not isinstance(exchange_cfg, dict):
                        errors.append(f"market.exchanges.{name} deve ser um dicionário")
                        continue
                    if 'policy' in exchange_cfg:
                        errors.extend(ConfigValidator._validate_policy(
                            f"market.exchanges.{name}.policy", exchange_cfg['policy']
                        ))

            journal_size = market.get('journal_size', 1)
            if not isinstance(journal_size, int) or journal_size <= 0:
                errors.append(f"market.journal_size deve ser inteiro positivo: {journal_size}")

        return errors

    @staticmethod
    def _validate_policy(path: str, spec: Any) -> List[str]:
        try:
            parse_policy(spec)
        except InvalidArgument as e:
            return [f"{path}: {e}"]
        return []

    @staticmethod
    def _get_nested_value(config: Dict, path: str) -> Any:
        """Obtém valor aninhado do config."""
        keys = path.split('.')
        value = config

        for key in keys:
            if isinstance(value, dict) and key in value:
                value = value[key]
            else:
                return None

        return value


class ConfigLoader:
    """
    Lê o YAML do simulador, resolve variáveis ${VAR:default} e mescla
    o resultado com get_default_config().
    """

    # Padrão para variáveis de ambiente: ${VAR_NAME:default_value}
    ENV_VAR_PATTERN = re.compile(r'\$\{([^:}]+)(?::([^}]*))?\}')

    def __init__(self, config_path: str = "config/config.yaml",
                 env_file: str = ".env"):
        """
        Inicializa o carregador de configurações.

        Args:
            config_path: Caminho do arquivo YAML (se não existir, valem os defaults)
            env_file: Caminho do arquivo .env (opcional)
        """
        self.config_path = Path(config_path)
        self.env_file = Path(env_file)
        self._config_cache = None
        self._last_modified = None

        if self.env_file.exists():
            load_dotenv(self.env_file)
            logger.info(f"Variáveis de ambiente carregadas de {self.env_file}")

    def load(self, validate: bool = True) -> Dict[str, Any]:
        """
        Carrega configurações com cache e validação.

        Args:
            validate: Se deve validar a configuração

        Returns:
            Dicionário de configuração

        Raises:
            ConfigurationError: Se houver erro na configuração
        """
        if self._is_cache_valid():
            return self._config_cache

        config = self._load_yaml()
        config = self._substitute_env_vars(config)
        config = self._merge_with_defaults(config)

        if validate:
            self._validate_config(config)

        self._config_cache = config
        self._last_modified = self._current_mtime()

        logger.info(f"Configuração carregada de {self.config_path}")
        return config

    def _current_mtime(self):
        return self.config_path.stat().st_mtime if self.config_path.exists() else None

    def _is_cache_valid(self) -> bool:
        """Cache vale enquanto o mtime do YAML não mudar."""
        if self._config_cache is None:
            return False
        return self._current_mtime() == self._last_modified

    def _load_yaml(self) -> Dict[str, Any]:
        """Carrega arquivo YAML; arquivo ausente equivale a configuração vazia."""
        if not self.config_path.exists():
            logger.warning(f"Arquivo de configuração não encontrado: {self.config_path}, usando padrões")
            return {}

        try:
            with open(self.config_path, 'r', encoding='utf-8') as f:
                config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Erro ao parsear YAML: {e}") from e
        except OSError as e:
            raise ConfigurationError(f"Erro ao carregar configuração: {e}") from e

        if config is None:
            return {}
        if not isinstance(config, dict):
            raise ConfigurationError("Configuração deve ser um dicionário")
        return config

    def _substitute_env_vars(self, obj: Any) -> Any:
        """
        Substitui variáveis de ambiente recursivamente.
        Formato: ${VAR_NAME:default_value}
        """
        if isinstance(obj, str):
            def replacer(match):
                var_name = match.group(1)
                default_value = match.group(2)

                value = os.environ.get(var_name, default_value)

                # Converte tipos básicos
                if value is not None:
                    if value.lower() in ('true', 'false'):
                        return value.lower() == 'true'
                    try:
                        if '.' in value:
                            return float(value)
                        return int(value)
                    except ValueError:
                        pass

                return value

            # String inteira é uma variável: retorna o valor convertido
            whole = self.ENV_VAR_PATTERN.fullmatch(obj)
            if whole:
                return replacer(whole)

            # Caso contrário, substituição parcial mantendo string
            return self.ENV_VAR_PATTERN.sub(lambda m: str(replacer(m)), obj)

        elif isinstance(obj, dict):
            return {k: self._substitute_env_vars(v) for k, v in obj.items()}

        elif isinstance(obj, list):
            return [self._substitute_env_vars(item) for item in obj]

        return obj

    def _merge_with_defaults(self, config: Dict[str, Any]) -> Dict[str, Any]:
        return deep_merge(get_default_config(), config)

    def _validate_config(self, config: Dict[str, Any]) -> None:
        validate_or_raise(config)

    def get_section(self, section: str) -> Dict[str, Any]:
        """
        Obtém uma seção específica da configuração.

        Args:
            section: Nome da seção

        Returns:
            Configuração da seção
        """
        config = self.load()
        return config.get(section, {})

    def reload(self) -> Dict[str, Any]:
        """Descarta o cache e lê o arquivo de novo."""
        self._config_cache = None
        self._last_modified = None
        return self.load()


def get_default_config() -> Dict[str, Any]:
    """Configuração usada quando não há YAML: política unchanged em todas as bolsas."""
    return {
        'system': {
            'log_dir': 'logs',
            'log_level': 'INFO',
            'environment': 'production'
        },
        'market': {
            'default_policy': {'kind': 'unchanged'},
            'exchanges': {},
            'journal_size': 10000
        }
    }


def deep_merge(base: Dict, override: Dict) -> Dict:
    """Mescla `override` sobre `base` sem alterar nenhum dos dois."""
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value

    return result


def validate_or_raise(config: Dict[str, Any]) -> None:
    """Valida a configuração, levantando ConfigurationError com todos os erros."""
    errors = ConfigValidator.validate_config(config)

    if errors:
        error_msg = "Erros de configuração encontrados:\n"
        error_msg += "\n".join(f"  - {error}" for error in errors)
        raise ConfigurationError(error_msg)


def prepare_config(overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Configuração em memória: defaults + overrides, validada."""
    config = deep_merge(get_default_config(), overrides or {})
    validate_or_raise(config)
    return config


# Funções de conveniência
@lru_cache(maxsize=4)
def load_config(config_path: str = "config/config.yaml") -> Dict[str, Any]:
    """
    Carrega configurações (com cache).

    Args:
        config_path: Caminho do arquivo de configuração

    Returns:
        Dicionário de configuração
    """
    loader = ConfigLoader(config_path)
    return loader.load()


def get_config_value(config: Dict[str, Any], path: str, default: Any = None) -> Any:
    """
    Obtém valor específico da configuração.

    Args:
        config: Configuração carregada
        path: Caminho no formato 'section.subsection.key'
        default: Valor padrão se não encontrar

    Returns:
        Valor da configuração ou default
    """
    value = ConfigValidator._get_nested_value(config, path)
    return default if value is None else value


class MarketSettings:
    """Atalhos tipados para a seção `market`."""

    __slots__ = ['config']

    def __init__(self, config: Dict[str, Any]):
        self.config = config

    @property
    def journal_size(self) -> int:
        return get_config_value(self.config, 'market.journal_size', 10000)

    @property
    def log_level(self) -> str:
        return str(get_config_value(self.config, 'system.log_level', 'INFO')).upper()

    @property
    def log_dir(self) -> str:
        return get_config_value(self.config, 'system.log_dir', 'logs')

    def default_policy(self) -> PricingPolicy:
        spec = get_config_value(self.config, 'market.default_policy')
        return parse_policy(spec) if spec is not None else Unchanged()

    def policy_for(self, exchange_name: str) -> PricingPolicy:
        """Política configurada para a bolsa, ou a política padrão."""
        # Nomes de bolsa podem conter '.', então não usa caminho pontuado
        exchanges = get_config_value(self.config, 'market.exchanges', {}) or {}
        spec = (exchanges.get(exchange_name) or {}).get('policy')
        if spec is None:
            return self.default_policy()
        return parse_policy(spec)


__all__ = [
    'ConfigLoader',
    'ConfigValidator',
    'ConfigurationError',
    'MarketSettings',
    'deep_merge',
    'get_default_config',
    'prepare_config',
    'validate_or_raise',
    'load_config',
    'get_config_value'
]
