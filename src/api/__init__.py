"""API: camada de borda com o serviço Apperian.

Responsabilidades:
- Transport HTTP (httpx) e parsing de erros remotos
- Adapters das duas gerações do protocolo (EASE JSON-RPC e REST v2)
- Validação da entrada do CLI

Subpastas:
- connectors/: Transport e adapters de protocolo
- validators/: validação de entrada → WorkflowConfig

NÃO PODE conter: FSM, orquestração de use cases.
"""
