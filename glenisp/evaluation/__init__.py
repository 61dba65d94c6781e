from glenisp.evaluation.apply import apply
from glenisp.evaluation.evaluator import evaluate, evaluate_sexp

__all__ = ["apply", "evaluate", "evaluate_sexp"]
