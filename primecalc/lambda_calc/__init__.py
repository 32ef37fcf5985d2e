from .expr import (
    VarExpr, ConstExpr, LamExpr, AppExpr, PairExpr, ImplExpr, PrimOpExpr,
    NameSupply, PRIME,
    is_value, free_vars, substitute, alpha_equivalent, expr_type,
)
from .translate import Translator, TypedTranslation, target_type, OPLUS
from .evaluate import LambdaEvaluator, EvaluationResult

__all__ = [
    "VarExpr", "ConstExpr", "LamExpr", "AppExpr", "PairExpr", "ImplExpr", "PrimOpExpr",
    "NameSupply", "PRIME",
    "is_value", "free_vars", "substitute", "alpha_equivalent", "expr_type",
    "Translator", "TypedTranslation", "target_type", "OPLUS",
    "LambdaEvaluator", "EvaluationResult",
]
