"""Unit tests for the tokenizer driver.

Run with:

    python3 tests/test_tokenizer.py
"""
import sys
import os

# Ensure project root is on the path regardless of working directory.
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from frontend.classifier import ClassifierRules
from frontend.errors import InvalidArgument
from frontend.splitter import split
from frontend.tokenizer import tokenize
from frontend.tokens import (
    Meta, MetaToken, Operand, OperandToken, Operator, OperatorToken, UnknownToken,
)


def test_tokenize_rejects_none():
    """tokenize(None) must fail at call time, not on first iteration."""
    try:
        tokenize(None)
    except InvalidArgument as e:
        assert e.argument == "lexemes"
    else:
        raise AssertionError("tokenize(None) must raise InvalidArgument")
    print("PASS: tokenize(None) raises")


def test_tokenize_empty_sequence():
    assert list(tokenize([])) == []
    print("PASS: empty lexeme sequence")


def test_tokenize_addition():
    tokens = list(tokenize(["3", "+", "4"]))
    assert tokens == [
        OperandToken("3", 0, Operand.NUMERIC),
        OperatorToken("+", 1, Operator.ADDITION),
        OperandToken("4", 2, Operand.NUMERIC),
    ], f"got {tokens!r}"
    print("PASS: 3 + 4")


def test_tokenize_unary_minus_after_parenthesis():
    tokens = list(tokenize(["(", "-", "2", ")"]))
    assert [t.subkind for t in tokens] == [
        Meta.LEFT_PARENTHESIS, Operator.UNARY_MINUS, Operand.NUMERIC, Meta.RIGHT_PARENTHESIS,
    ], f"got {tokens!r}"
    print("PASS: ( - 2 )")


def test_tokenize_subtraction_after_operand():
    tokens = list(tokenize(["3", "-", "2"]))
    assert tokens[1] == OperatorToken("-", 1, Operator.SUBTRACTION), f"got {tokens[1]!r}"
    print("PASS: 3 - 2")


def test_whitespace_is_filtered_but_counted():
    tokens = list(tokenize(["3", "  ", "-", "\t", "2"]))
    assert [t.lexeme for t in tokens] == ["3", "-", "2"]
    assert [t.position for t in tokens] == [0, 3, 5], f"got {[t.position for t in tokens]}"
    # Whitespace is not "previous" context: the minus follows the operand 3
    assert tokens[1].subkind is Operator.SUBTRACTION
    print("PASS: whitespace filtered, positions kept")


def test_whitespace_does_not_make_sign_unary():
    """'x' then whitespace then '+' must stay binary."""
    tokens = list(tokenize(split("x   +   y")))
    assert tokens[1].subkind is Operator.ADDITION
    assert [t.position for t in tokens] == [0, 4, 8]
    print("PASS: whitespace skipped as context")


def test_positions_strictly_increase():
    src = " ( a+-b ) , max( 1.5 ,c )/ d ?"
    tokens = list(tokenize(split(src)))
    positions = [t.position for t in tokens]
    assert positions == sorted(set(positions)), f"positions not strictly increasing: {positions}"
    for tok in tokens:
        assert src[tok.position:tok.end] == tok.lexeme, f"{tok} does not point at its lexeme"
    print("PASS: positions strictly increase and point at lexemes")


def test_tokenize_is_lazy():
    """Only the lexemes actually pulled are consumed."""
    consumed = []

    def lexemes():
        for lex in ["1", "+", "2", "*", "3"]:
            consumed.append(lex)
            yield lex

    stream = tokenize(lexemes())
    assert consumed == [], "tokenize must not consume lexemes before iteration"
    first = next(stream)
    assert first.lexeme == "1"
    assert consumed == ["1"], f"got {consumed}"
    next(stream)
    assert consumed == ["1", "+"], f"got {consumed}"
    print("PASS: tokenize is lazy")


def test_tokenize_is_not_restartable():
    stream = tokenize(iter(["1", "+", "2"]))
    assert len(list(stream)) == 3
    assert list(stream) == []
    # A fresh call over the same input yields the same tokens
    lexemes = ["1", "+", "2"]
    assert list(tokenize(lexemes)) == list(tokenize(lexemes))
    print("PASS: single-use stream, deterministic re-invocation")


def test_tokenize_uses_injected_rules():
    rules = ClassifierRules().with_functions({"f"})
    tokens = list(tokenize(["f", "(", "sin", ")"], rules))
    assert tokens[0] == OperatorToken("f", 0, Operator.FUNCTION)
    assert tokens[2] == OperandToken("sin", 2, Operand.VARIABLE)
    print("PASS: injected registry")


def test_unknown_does_not_stop_stream():
    tokens = list(tokenize(["1", "#", "+", "2"]))
    assert tokens[1] == UnknownToken("#", 1)
    assert tokens[2].subkind is Operator.ADDITION
    assert tokens[3] == OperandToken("2", 3, Operand.NUMERIC)
    print("PASS: unknown lexeme does not stop tokenization")


def test_meta_tokens():
    tokens = list(tokenize(["(", ",", ")"]))
    assert tokens == [
        MetaToken("(", 0, Meta.LEFT_PARENTHESIS),
        MetaToken(",", 1, Meta.COMMA),
        MetaToken(")", 2, Meta.RIGHT_PARENTHESIS),
    ]
    print("PASS: meta tokens")


if __name__ == '__main__':
    test_tokenize_rejects_none()
    test_tokenize_empty_sequence()
    test_tokenize_addition()
    test_tokenize_unary_minus_after_parenthesis()
    test_tokenize_subtraction_after_operand()
    test_whitespace_is_filtered_but_counted()
    test_whitespace_does_not_make_sign_unary()
    test_positions_strictly_increase()
    test_tokenize_is_lazy()
    test_tokenize_is_not_restartable()
    test_tokenize_uses_injected_rules()
    test_unknown_does_not_stop_stream()
    test_meta_tokens()
    print("\nAll tests passed.")
