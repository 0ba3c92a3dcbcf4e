# src/node_config/core/config/hashing.py
"""
Hashing canônico da configuração efetiva.

O hash representa a identidade estrutural do documento resolvido
(primário + overlay) e é registrado no log do loader para que operadores
possam comparar a configuração efetiva entre nós e reinicializações.

Política de hashing (v1):
    - Serialização JSON canônica de `ConfigDocument.to_dict()`
    - Ordenação estável de chaves
    - Separadores compactos
    - Codificação UTF-8
    - SHA-256

Invariantes:
    - Documentos equivalentes produzem o mesmo hash
    - O valor gerado é sempre uma string hexadecimal de 64 caracteres

Limites explícitos:
    - Não carrega nem resolve configuração
    - Não persiste o hash
"""

import hashlib
import json

from .schema import ConfigDocument


def compute_config_hash(document: ConfigDocument) -> str:
    """
    Gera um hash determinístico do documento de configuração.

    Raises:
        TypeError: se o objeto fornecido não for um `ConfigDocument`.
    """
    if not isinstance(document, ConfigDocument):
        raise TypeError(
            f"Config para hashing deve ser ConfigDocument, recebido: {type(document).__name__}"
        )

    canonical_json = json.dumps(
        document.to_dict(),
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
        default=str,
    )

    return hashlib.sha256(canonical_json.encode("utf-8")).hexdigest()
