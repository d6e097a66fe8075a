"""
Core do railflow.

Componentes principais:
    - pipeline     → Step, StepRegistry, sinais e contexto
    - engine       → execução railway-oriented filtrada por track
    - traceability → FlowControlRecord e Trace
    - config       → carregamento de configuração e nível de log
    - facade       → Pipeline invocável e build_pipeline

Princípios fundamentais:
    - Falha de negócio é dado inspecionável no trace
    - Erros de construção falham imediatamente (`ConfigurationError`)
    - Defeitos de operações propagam ao chamador sem encapsulamento
"""
