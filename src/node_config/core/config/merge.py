# src/node_config/core/config/merge.py
"""
Overlay de documentos de configuração.

Este módulo implementa a política oficial de overlay utilizada para
resolver a configuração efetiva a partir de um documento primário e de
um documento de overlay opcional.

Política de overlay (v1):
    - setting presente no overlay → substitui o valor da base
    - setting ausente no overlay  → valor da base é preservado
    - documento aninhado          → substituição integral (sem merge recursivo)
    - coleção                     → substituição integral
    - não existe conflito: o overlay sempre vence nos settings que define

Princípios fundamentais:
    - A base é alterada in place e retornada
    - Nenhuma validação é feita aqui (cada lado já foi validado no decode)
    - Overlay vazio é a identidade sobre a base

Limites explícitos:
    - Não carrega arquivos
    - Não suporta cadeias de overlay (zero ou um overlay)
"""

from __future__ import annotations

from typing import TypeVar

from .schema import ConfigDocument


D = TypeVar("D", bound=ConfigDocument)


def overlay(base: D, other: ConfigDocument) -> D:
    """
    Aplica `other` sobre `base`, setting a setting.

    Apenas os settings explicitamente presentes na fonte do overlay são
    copiados; valores default do overlay nunca sobrescrevem a base.

    Args:
        base: documento primário (alterado in place).
        other: documento de overlay do mesmo tipo.

    Returns:
        O próprio `base`, já com o overlay aplicado.

    Raises:
        TypeError: se os documentos não forem do mesmo tipo.
    """
    if type(base) is not type(other):
        raise TypeError(
            f"Overlay requires documents of the same type, got "
            f"{type(base).__name__} vs {type(other).__name__}"
        )

    for name in other.SCHEMA.names():
        if other.is_explicit(name):
            base.set_explicit(name, getattr(other, name))

    return base
