# src/node_config/core/config/errors.py
"""
Exceções canônicas da camada de configuração do node-config.

Este módulo define a hierarquia oficial de exceções utilizadas durante
a resolução de localização, o carregamento, a validação estrutural e o
overlay da configuração de um nó.

Princípios fundamentais:
    - Exceções são tipadas e semânticas
    - Mensagens são autocontidas e acionáveis pelo operador
    - Toda chave ou localização problemática é nomeada na mensagem

Hierarquia:
    ConfigurationError
        ├── InvalidOverrideError      (valor inválido em variável de ambiente)
        ├── UnprefixedLocationError   (localização sem prefixo de arquivo local)
        ├── ResourceNotFoundError     (localização prefixada, mas inexistente)
        ├── ConfigSyntaxError         (YAML malformado ou valor inconvertível)
        └── InvalidConfigurationError (chaves desconhecidas ou anuladas)

Invariantes:
    - Todas as exceções de configuração herdam de `ConfigurationError`
    - Nenhuma exceção realiza fallback ou recovery

Limites explícitos:
    - Não decide quando um erro pode ser ignorado (isso é papel do loader)
    - Não registra logs
"""

from __future__ import annotations

from typing import Iterable, Optional


class ConfigurationError(Exception):
    """
    Exceção base para erros relacionados à configuração do nó.

    Atributos:
        message: mensagem humana e autocontida.
        hint: ação sugerida ao operador, quando existir.
        log_stack_trace: sugestão aos handlers sobre incluir ou não o
            stack trace ao registrar o erro. Erros esperados com mensagem
            informativa não precisam de stack trace.
    """

    def __init__(
        self,
        message: str,
        *,
        hint: Optional[str] = None,
        log_stack_trace: bool = True,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.hint = hint
        self.log_stack_trace = log_stack_trace

    def __str__(self) -> str:
        if self.hint:
            return f"{self.message} {self.hint}"
        return self.message


class InvalidOverrideError(ConfigurationError):
    """Variável de ambiente reconhecida com valor inválido."""


class UnprefixedLocationError(ConfigurationError):
    """
    Exceção levantada quando uma localização não pôde ser resolvida e
    também não possui o prefixo exigido para arquivos locais (`file://`).

    A mensagem sempre descreve a sintaxe exata esperada para arquivos
    locais e remotos.
    """

    def __init__(self, message: str, *, property_key: str, value: str, hint: Optional[str] = None) -> None:
        super().__init__(message, hint=hint)
        self.property_key = property_key
        self.value = value


class ResourceNotFoundError(ConfigurationError):
    """
    Exceção levantada quando o nome lógico não pôde ser resolvido para
    nenhuma localização legível após todas as estratégias de resolução.

    Recuperável pelo loader em exatamente um caso: overlay default ausente.
    """

    def __init__(self, message: str, *, value: str, hint: Optional[str] = None) -> None:
        super().__init__(message, hint=hint)
        self.value = value


class ConfigSyntaxError(ConfigurationError):
    """
    Exceção levantada quando o recurso foi encontrado, mas o conteúdo não
    é YAML bem formado ou não pode ser convertido para os tipos do schema.

    Sempre fatal.
    """

    def __init__(self, source: str, problem: str) -> None:
        super().__init__(f"Invalid yaml: {source}\n Error: {problem}", log_stack_trace=False)
        self.source = source
        self.problem = problem


class InvalidConfigurationError(ConfigurationError):
    """
    Exceção levantada após o decode quando o relatório de validação não
    está vazio.

    Lista todas as chaves desconhecidas e todas as chaves obrigatórias
    anuladas explicitamente, nunca apenas a primeira.
    """

    def __init__(
        self,
        source: str,
        *,
        unknown_keys: Iterable[str] = (),
        nullified_required_keys: Iterable[str] = (),
    ) -> None:
        self.source = source
        self.unknown_keys = sorted(unknown_keys)
        self.nullified_required_keys = sorted(nullified_required_keys)

        problems = []
        if self.nullified_required_keys:
            problems.append(
                f"Those properties {self.nullified_required_keys} are not valid: "
                "they are required and cannot be set to null."
            )
        if self.unknown_keys:
            problems.append(f"Please remove properties {self.unknown_keys} from your configuration.")
        super().__init__(
            f"Invalid yaml: {source}. " + " ".join(problems),
            log_stack_trace=False,
        )
