"""Configuração da aplicação."""
import os
from dataclasses import dataclass, field
from typing import FrozenSet, Iterable, Optional


def _split(value: Optional[str]) -> FrozenSet[str]:
    """Lista separada por vírgulas -> frozenset sem vazios."""
    if not value:
        return frozenset()
    return frozenset(item.strip() for item in value.split(",") if item.strip())


def _flag(value: Optional[str]) -> bool:
    return (value or "").strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class AnalysisConfig:
    """Configuração imutável de uma análise de operações."""

    include_name_prefixes: FrozenSet[str] = frozenset()
    enable_name_case_conversion: bool = False

    @classmethod
    def of(cls, prefixes: Iterable[str] = (), snake_case: bool = False) -> "AnalysisConfig":
        return cls(
            include_name_prefixes=frozenset(p for p in prefixes if p),
            enable_name_case_conversion=snake_case,
        )

    @classmethod
    def from_env(cls) -> "AnalysisConfig":
        """Carrega config de variáveis de ambiente."""
        return cls(
            include_name_prefixes=_split(os.getenv("APIDOC_INCLUDE_PREFIXES")),
            enable_name_case_conversion=_flag(os.getenv("APIDOC_SNAKE_CASE")),
        )

    def is_included(self, module_name: Optional[str]) -> bool:
        """Classe de um módulo incluído na análise (expande parâmetros)."""
        if not module_name:
            return False
        return any(module_name.startswith(prefix) for prefix in self.include_name_prefixes)


@dataclass
class AppConfig:
    """Configuração da aplicação."""

    output: str = "./output/apidoc.json"
    workers: int = 4
    exclude_classes: FrozenSet[str] = field(default_factory=frozenset)
    analysis: AnalysisConfig = None

    def __post_init__(self):
        """Inicializa valores padrão."""
        if self.analysis is None:
            self.analysis = AnalysisConfig.from_env()

    @classmethod
    def from_env(cls) -> "AppConfig":
        """Carrega config de variáveis de ambiente."""
        return cls(
            output=os.getenv("APIDOC_OUTPUT", "./output/apidoc.json"),
            workers=int(os.getenv("APIDOC_WORKERS", "4")),
            exclude_classes=_split(os.getenv("APIDOC_EXCLUDE_CLASSES")),
            analysis=AnalysisConfig.from_env(),
        )


# Instância global
app_config = AppConfig.from_env()
