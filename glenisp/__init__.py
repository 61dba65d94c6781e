# glenisp: a small Lisp-like expression language.
#
# Layout:
# - glenisp.types:       runtime values (Number, Symbol, Sexp, Qexp, Lambda, ...) and scope frames
# - glenisp.reader:      source text -> ParseNode tree -> Value tree
# - glenisp.evaluation:  evaluator and function application
# - glenisp.builtin:     the builtin catalogue registered into the root environment
# - glenisp.interpreter: facade tying the pieces together around one root environment

__version__ = "0.1.0"
