# Expression ("deref") grammar. Spaces separate application arguments; no
# separator is needed before an argument starting with `(` or `"`.
# Trailing spaces/tabs belong to whatever closes the expression.
DEREF_GRAMMAR = r"""
expr: _HWS? _expr_body

_expr_body: application
          | dollar
          | infix

application: single (_SP single | psingle)*
dollar: application _DOLLAR expr
infix: application _SP OPERATOR _SP application

single: _atom GETFIELD*
psingle: _patom GETFIELD* -> single

_atom: _patom
     | list_expr
     | NUMBER
     | QIDENT

_patom: tuple_expr
      | parens
      | OPERATOR_NAME
      | STRING

parens: _DLPAR expr _DRPAR
tuple_expr: _DLPAR expr (_DCOMMA expr)+ _DRPAR
list_expr: _DLBRACK (expr (_DCOMMA expr)*)? _DRBRACK

QIDENT: /(?:\p{Lu}\w*\.)*(?!\d)\w[\w']*/
GETFIELD: /\.[\p{Ll}_][\w']*/
NUMBER: /-?\d+(?:\.\d+)?/
STRING: /"(?:[^"\\]|\\[nrbt"'\\])*"/
OPERATOR_NAME: /\([!#$%&*+.\/<=>?@\\^|\-~:]+\)/
OPERATOR: /(?!\$(?![!#$%&*+.\/<=>?@\\^|\-~:]))[!#$%&*+.\/<=>?@\\^|\-~:]+/

_DOLLAR: / +\$/
_SP: / +/
_HWS: /[ \t]+/
_DLPAR: "("
_DRPAR: /[ \t]*\)/
_DCOMMA: /[ \t]*,/
_DLBRACK: "["
_DRBRACK: /[ \t]*\]/
"""

TERMINAL_LABELS = {
    "QIDENT": "identifier",
    "GETFIELD": "field access",
    "NUMBER": "number",
    "STRING": "string literal",
    "OPERATOR_NAME": "operator name",
    "OPERATOR": "operator",
    "_DOLLAR": "`$`",
    "_SP": "space",
    "_HWS": "whitespace",
    "_DLPAR": "`(`",
    "_DRPAR": "`)`",
    "_DCOMMA": "`,`",
    "_DLBRACK": "`[`",
    "_DRBRACK": "`]`",
}
