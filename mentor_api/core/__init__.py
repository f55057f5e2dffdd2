"""Core orchestration package.

Architectural role:
    Exposes the evaluation pipeline that sits between the API/CLI entrypoints and
    the validator, prompting and LLM layers.

Composition:
    - `engine`: canonical validate -> compose -> invoke pipeline.
    - `pipeline_types`: request-scoped records passed between layers.
    - `errors`: terminal error taxonomy.
"""
