# src/node_config/core/config/decoder.py
"""
Decoder de YAML com verificação de schema.

Este módulo converte bytes YAML em um `ConfigDocument` tipado e, na mesma
passada, acumula um `ValidationReport` com:
    - chaves presentes na fonte sem setting correspondente no schema
    - settings obrigatórios (default não nulo) anulados explicitamente

Política de decode:
    - Todo o documento é percorrido; problemas de validação são coletados,
      nunca interrompem o decode
    - Null explícito em setting obrigatório é registrado *e* atribuído
    - Settings ausentes mantêm o default do schema e não são registrados
    - Entrada vazia produz o documento default, nunca None
    - Coleções decodificadas são sempre containers concorrentes

Erros:
    - YAML malformado ou valor inconvertível → ConfigSyntaxError (imediato)
    - Achados de validação → diferidos até `ValidationReport.check`

Limites explícitos:
    - Não resolve nem lê localizações
    - Não aplica overlay
    - Não valida ranges ou consistência entre settings
"""

from __future__ import annotations

import datetime
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Generic, Set, Type, TypeVar

import yaml  # PyYAML

from .containers import new_dict, new_list, new_set
from .errors import ConfigSyntaxError, InvalidConfigurationError
from .schema import ConfigDocument, ListOf, MapOf, SetOf


D = TypeVar("D", bound=ConfigDocument)


@dataclass
class ValidationReport:
    """
    Achados de uma única passada de decode.

    Criado vazio a cada chamada de `decode`, consultado uma vez logo em
    seguida e descartado.
    """

    unknown_keys: Set[str] = field(default_factory=set)
    nullified_required_keys: Set[str] = field(default_factory=set)

    def is_empty(self) -> bool:
        return not self.unknown_keys and not self.nullified_required_keys

    def check(self, source: str) -> None:
        """
        Converte achados em erro.

        Raises:
            InvalidConfigurationError: listando todas as chaves desconhecidas
                e todas as chaves obrigatórias anuladas.
        """
        if self.is_empty():
            return
        raise InvalidConfigurationError(
            source,
            unknown_keys=self.unknown_keys,
            nullified_required_keys=self.nullified_required_keys,
        )


@dataclass(frozen=True)
class DecodeResult(Generic[D]):
    document: D
    report: ValidationReport


def _type_name(type_: Any) -> str:
    if isinstance(type_, ListOf):
        return f"list of {_type_name(type_.element)}"
    if isinstance(type_, SetOf):
        return f"set of {_type_name(type_.element)}"
    if isinstance(type_, MapOf):
        return f"map of {_type_name(type_.key)} to {_type_name(type_.value)}"
    return getattr(type_, "__name__", repr(type_))


def _join(path: str, name: str) -> str:
    return f"{path}.{name}" if path else name


class _SchemaWalker:
    """Percorre a árvore YAML guiado pelo schema, preenchendo o relatório."""

    def __init__(self, source: str, report: ValidationReport) -> None:
        self.source = source
        self.report = report

    def _fail(self, path: str, type_: Any, node: Any) -> ConfigSyntaxError:
        return ConfigSyntaxError(
            self.source,
            f"Cannot create property={path or '<root>'}: expected {_type_name(type_)}, "
            f"got {type(node).__name__} {node!r}",
        )

    def document(self, document_type: Type[D], node: Any, path: str = "") -> D:
        if not isinstance(node, dict):
            raise self._fail(path, document_type, node)

        doc = document_type()
        for key, raw in node.items():
            name = str(key)
            key_path = _join(path, name)
            setting = document_type.SCHEMA.get(name)

            if setting is None:
                self.report.unknown_keys.add(key_path)
                continue

            if raw is None:
                if not setting.nullable:
                    self.report.nullified_required_keys.add(key_path)
                doc.set_explicit(name, None)
                continue

            doc.set_explicit(name, self.value(setting.type, raw, key_path))
        return doc

    def value(self, type_: Any, node: Any, path: str) -> Any:
        if node is None:
            return None

        if isinstance(type_, ListOf):
            if not isinstance(node, list):
                raise self._fail(path, type_, node)
            return new_list(self.value(type_.element, v, f"{path}[{i}]") for i, v in enumerate(node))

        if isinstance(type_, SetOf):
            if not isinstance(node, (list, set)):
                raise self._fail(path, type_, node)
            return new_set(self.value(type_.element, v, f"{path}[{i}]") for i, v in enumerate(node))

        if isinstance(type_, MapOf):
            if not isinstance(node, dict):
                raise self._fail(path, type_, node)
            return new_dict(
                (self.value(type_.key, k, path), self.value(type_.value, v, _join(path, str(k))))
                for k, v in node.items()
            )

        if isinstance(type_, type) and issubclass(type_, ConfigDocument):
            return self.document(type_, node, path)

        if isinstance(type_, type) and issubclass(type_, Enum):
            return self._enum(type_, node, path)

        return self._scalar(type_, node, path)

    def _enum(self, enum_type: Type[Enum], node: Any, path: str) -> Enum:
        if isinstance(node, str):
            for candidate in (node, node.upper()):
                if candidate in enum_type.__members__:
                    return enum_type[candidate]
        for member in enum_type:
            if member.value == node:
                return member
        raise self._fail(path, enum_type, node)

    def _scalar(self, type_: Any, node: Any, path: str) -> Any:
        if isinstance(node, (dict, list)):
            raise self._fail(path, type_, node)

        if type_ is str:
            if isinstance(node, bool):
                return "true" if node else "false"
            if isinstance(node, (datetime.date, datetime.datetime)):
                return node.isoformat()
            return str(node)

        if type_ is bool:
            if isinstance(node, bool):
                return node
            raise self._fail(path, type_, node)

        if type_ is int:
            if isinstance(node, int) and not isinstance(node, bool):
                return node
            raise self._fail(path, type_, node)

        if type_ is float:
            if isinstance(node, (int, float)) and not isinstance(node, bool):
                return float(node)
            raise self._fail(path, type_, node)

        if isinstance(node, type_):
            return node
        raise self._fail(path, type_, node)


def decode(data: bytes, document_type: Type[D], *, source: str = "<bytes>") -> DecodeResult[D]:
    """
    Decodifica bytes YAML em um documento do tipo `document_type`.

    Args:
        data: conteúdo bruto do recurso.
        document_type: subclasse de `ConfigDocument` alvo.
        source: identificador do recurso, usado nas mensagens de erro.

    Returns:
        DecodeResult: documento decodificado e relatório de validação.

    Raises:
        ConfigSyntaxError: se o YAML for malformado, a raiz não for um
            mapeamento, ou algum valor não puder ser convertido.
    """
    try:
        tree = yaml.safe_load(data)
    except yaml.YAMLError as e:
        raise ConfigSyntaxError(source, str(e)) from e

    report = ValidationReport()
    if tree is None:
        # YAML vazio -> None
        return DecodeResult(document=document_type(), report=report)

    document = _SchemaWalker(source, report).document(document_type, tree)
    return DecodeResult(document=document, report=report)
