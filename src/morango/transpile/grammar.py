''' Token grammar '''

import pyparsing as pp


id = pp.Word(pp.alphas + '_', pp.alphanums + '_')

variable = id
label = pp.Combine(pp.Literal('&') + id)
number = pp.Regex('[0-9]+').set_parse_action(lambda r: int(r[0]))


def is_variable(token: str) -> bool:
    return variable.matches(token)


def is_label(token: str) -> bool:
    return label.matches(token)


def parse_number(token: str) -> int | None:
    try:
        return number.parse_string(token, parse_all=True)[0]
    except pp.ParseException:
        return None
