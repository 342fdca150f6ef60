"""
LLM consensus models.

This subpackage contains Pydantic models for configuration, run
parameters, query requests/responses and results.

Key models:
    - Config: Application configuration loaded from environment
    - RunParams: Parameters for a consensus run
    - QueryRequest / QueryResponse: Single model query input/output
    - RunResult: Runner output (responses, warnings, failed models)
    - ConsensusResult: Final artifact with the JSON output contract
    - ModelCatalog: Model to provider-kind mapping
"""

from .config import Config, load_env, DEFAULT_JUDGE
from .run_params import RunParams
from .query import QueryRequest, QueryResponse
from .run_result import RunResult
from .progress import ModelStatus, ModelQueryState
from .consensus_result import ConsensusResult
from .catalog import ModelCatalog, ProviderKind

__all__ = [
    "Config",
    "load_env",
    "DEFAULT_JUDGE",
    "RunParams",
    "QueryRequest",
    "QueryResponse",
    "RunResult",
    "ModelStatus",
    "ModelQueryState",
    "ConsensusResult",
    "ModelCatalog",
    "ProviderKind",
]
