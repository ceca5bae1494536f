from .charts import (
    PlacementIn,
    AnalyzeOptions,
    AnalyzeRequest,
    AnalyzeResponse,
    InterpretResponse,
    MetaOut,
)
