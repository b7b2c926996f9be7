"""Validators de entrada, executados antes de qualquer chamada de rede.

Estrutura:
- apperian/: opções do publicador (credenciais, plataforma, binário, metadados)
"""

from api.validators.apperian import PublishOptions, build_workflow_config

__all__ = ["PublishOptions", "build_workflow_config"]
