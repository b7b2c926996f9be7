"""App: coração do sistema, orquestração do fluxo de publicação.

Subpastas:
- bootstrap/: composition root (factories, wiring settings → transport → adapter)
- cli/: ponto de entrada de linha de comando
- domain/: WorkflowConfig, metadados e modelos remotos
- use_cases/: orquestrador do fluxo (sem IO direto)
- protocols/: contratos/interfaces
- sessions/: sessão autenticada
- observability/: correlation id e métricas via logs

Padrão: app executa; api adapta; fsm governa; utils apoia.
"""
