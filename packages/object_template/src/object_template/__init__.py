from .checks import (
    is_boolean,
    is_integer,
    is_iso_date,
    is_list,
    is_mapping,
    is_number,
    is_string,
)
from .combinators import (
    and_,
    array,
    choice,
    equals,
    exists,
    map_of,
    nullable,
    obj,
    optional,
    or_,
    predicate,
    recursive_object,
)
from .config import ObjectTemplateConfig, default_config
from .describe import describe_mismatch, describe_result, describe_template, render_value
from .engine import MismatchListener, TemplateValidator, evaluate, match, validate
from .errors import MalformedTemplateError, TemplateDepthError, TemplateError
from .mismatch import KeySetMismatch, MatchResult, Mismatch, ValueMismatch
from .nodes import (
    MISSING,
    TemplateNode,
    TplAnd,
    TplArray,
    TplChoice,
    TplCheck,
    TplEquals,
    TplExists,
    TplMap,
    TplNullable,
    TplObject,
    TplOptional,
    TplOr,
    TplTuple,
    is_template_node,
)
from .normalize import coerce_node, normalize
from .report import MismatchReport, build_mismatch_report

__all__ = [
    "MISSING",
    "KeySetMismatch",
    "MalformedTemplateError",
    "MatchResult",
    "Mismatch",
    "MismatchListener",
    "MismatchReport",
    "ObjectTemplateConfig",
    "TemplateDepthError",
    "TemplateError",
    "TemplateNode",
    "TemplateValidator",
    "TplAnd",
    "TplArray",
    "TplChoice",
    "TplCheck",
    "TplEquals",
    "TplExists",
    "TplMap",
    "TplNullable",
    "TplObject",
    "TplOptional",
    "TplOr",
    "TplTuple",
    "ValueMismatch",
    "and_",
    "array",
    "build_mismatch_report",
    "choice",
    "coerce_node",
    "default_config",
    "describe_mismatch",
    "describe_result",
    "describe_template",
    "equals",
    "evaluate",
    "exists",
    "is_boolean",
    "is_integer",
    "is_iso_date",
    "is_list",
    "is_mapping",
    "is_number",
    "is_string",
    "is_template_node",
    "map_of",
    "match",
    "normalize",
    "nullable",
    "obj",
    "optional",
    "or_",
    "predicate",
    "recursive_object",
    "render_value",
    "validate",
]

__version__ = "0.0.0"
