import re

from templine.deref.grammar import DEREF_GRAMMAR, TERMINAL_LABELS as DEREF_LABELS

# <CTRL> and <VAR> are replaced by the (regex-escaped) trigger characters.
LINE_GRAMMAR = r"""
line: (_content | statement)*

_content: raw
        | interpolation
        | var_literal
        | ctrl_literal

raw: RAW
interpolation: _VAR_OPEN expr _VAR_CLOSE
var_literal: VAR_ESCAPE
           | VAR_AT_EOL
           | VAR_BARE
ctrl_literal: CTRL_ESCAPE
            | CTRL_BARE

statement: _CTRL_OPEN _directive _CTRL_CLOSE

_directive: forall_start
          | forall_end
          | if_start
          | else_if
          | else_branch
          | if_end
          | case_start
          | case_of
          | case_end

forall_start: _KW_FORALL pattern _ARROW expr
forall_end: _KW_ENDFORALL
if_start: _KW_IF expr
else_if: _KW_ELSEIF expr
else_branch: _KW_ELSE
if_end: _KW_ENDIF
case_start: _KW_CASE expr
case_of: _KW_OF pattern
case_end: _KW_ENDCASE

RAW: /[^<CTRL><VAR>]+/

_VAR_OPEN: /<VAR>\{/
_VAR_CLOSE: /[ \t]*\}/
VAR_ESCAPE: /<VAR>\\/
VAR_AT_EOL: /<VAR>(?=[\r\n]|\Z)/
VAR_BARE: /<VAR>(?![\\{\r\n]|\Z)/

CTRL_ESCAPE: /<CTRL>\\(?:\r?\n)?/
CTRL_BARE: /<CTRL>(?![\\{])(?:\r?\n)?/
_CTRL_OPEN: /<CTRL>\{\s*/
_CTRL_CLOSE: /\s*\}(?:\r?\n)?/

_KW_FORALL: /forall(?![\w'])\s*/
_KW_ENDFORALL: /endforall(?![\w'])/
_KW_IF: /if(?![\w'])\s*/
_KW_ELSEIF: /elseif(?![\w'])\s*/
_KW_ELSE: /else(?![\w'])/
_KW_ENDIF: /endif(?![\w'])/
_KW_CASE: /case(?![\w'])\s*/
_KW_OF: /of(?![\w'])\s*/
_KW_ENDCASE: /endcase(?![\w'])/
_ARROW: /\s*<-\s*/
"""

# Pattern bindings. Every structural token swallows the spaces (not tabs)
# that follow it, so the rules never mention whitespace.
# `binding` is the entry point used when a pattern is parsed on its own.
PATTERN_GRAMMAR = r"""
binding: pattern

?pattern: con_app
        | _apat

con_app: qcon _apat+

_apat: var
     | as_pat
     | bare_con
     | record
     | tuple_pat
     | list_pat

var: VARID
as_pat: VARID _AT _apat
bare_con: qcon
record: qcon _LBRACE _record_fields? _RBRACE
_record_fields: WILDCARD
              | field (_PCOMMA field)* (_PCOMMA WILDCARD)?
field: (VARID | CONID | OPID) (_EQUALS pattern)?
tuple_pat: _LPAREN (pattern (_PCOMMA pattern)*)? _RPAREN
list_pat: _LBRACKET (pattern (_PCOMMA pattern)*)? _RBRACKET

qcon: _con_piece (_DOT _con_piece)*
_con_piece: CONID
          | OPID

VARID: /(?![\p{Lu}\p{Lt}])[\w']+ */
CONID: /[\p{Lu}\p{Lt}][\w']* */
OPID: /\([!#$%&*+.\/<=>?@\\^|\-~:]+\) */
WILDCARD: /\.\. */

_DOT: "."
_AT: /@ */
_EQUALS: /= */
_PCOMMA: /, */
_LPAREN: /\( */
_RPAREN: /\) */
_LBRACKET: /\[ */
_RBRACKET: /\] */
_LBRACE: /\{ */
_RBRACE: /\} */
"""

TERMINAL_LABELS = {
    **DEREF_LABELS,
    "RAW": "text",
    "_VAR_OPEN": "interpolation",
    "_VAR_CLOSE": "`}`",
    "VAR_ESCAPE": "escaped variable trigger",
    "VAR_AT_EOL": "variable trigger",
    "VAR_BARE": "variable trigger",
    "CTRL_ESCAPE": "escaped control trigger",
    "CTRL_BARE": "control trigger",
    "_CTRL_OPEN": "control statement",
    "_CTRL_CLOSE": "`}`",
    "_KW_FORALL": "`forall`",
    "_KW_ENDFORALL": "`endforall`",
    "_KW_IF": "`if`",
    "_KW_ELSEIF": "`elseif`",
    "_KW_ELSE": "`else`",
    "_KW_ENDIF": "`endif`",
    "_KW_CASE": "`case`",
    "_KW_OF": "`of`",
    "_KW_ENDCASE": "`endcase`",
    "_ARROW": "`<-`",
    "VARID": "variable",
    "CONID": "constructor",
    "OPID": "operator constructor",
    "WILDCARD": "`..`",
    "_DOT": "`.`",
    "_AT": "`@`",
    "_EQUALS": "`=`",
    "_PCOMMA": "`,`",
    "_LPAREN": "`(`",
    "_RPAREN": "`)`",
    "_LBRACKET": "`[`",
    "_RBRACKET": "`]`",
    "_LBRACE": "`{`",
    "_RBRACE": "`}`",
}


def _re_char(ch: str) -> str:
    # also escape the slash that delimits lark regexp literals
    return re.escape(ch).replace("/", "\\/")


def line_grammar(control_prefix: str, variable_prefix: str) -> str:
    line = (
        LINE_GRAMMAR
        .replace("<CTRL>", _re_char(control_prefix))
        .replace("<VAR>", _re_char(variable_prefix))
    )
    return line + PATTERN_GRAMMAR + DEREF_GRAMMAR
