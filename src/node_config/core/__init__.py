# src/node_config/core/__init__.py
"""
Core do node-config.

Componentes principais:
    - config → resolução, decode validado, overlay e hashing de configuração
    - node   → schema do documento de configuração de um nó

Limites explícitos:
    - Não inicializa o processo servidor
    - Não configura logging
"""
