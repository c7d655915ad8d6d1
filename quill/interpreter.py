"""Tree-walking interpreter for the Quill language.

``Interpreter.evaluate`` takes an AST node and an environment and
returns ``Ok(value)`` or ``Err(error)``. Evaluation stops at the first
error, which is handed back unchanged through every enclosing node.

A ``return`` statement evaluates to ``Ok(ReturnSignal(value))``. Blocks
and loops stop as soon as they see a signal and pass it outwards until
the enclosing function call (or the program itself) unwraps it.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Optional, TextIO

from .ast import (
    Node, Program, NumericLiteral, StringLiteral, Literal, Identifier,
    ArrayLiteral, ObjectLiteral, VarDeclaration, VarAssignment, UnaryExpr,
    LogicalExpr, BinaryExpr, IfStatement, ForStatement, WhileStatement,
    BlockStatement, ReturnStatement, CallExpr, FunctionDeclaration,
)
from .environment import Environment
from .errors import (
    RedeclarationError, UndeclaredAssignmentError,
    NonFunctionCallError, TypeMismatchError, DivideByZeroError,
    UnhandledNodeError,
)
from .result import Ok, Err, Result
from .values import (
    RuntimeValue, NumberVal, StringVal, ArrayVal, ObjectVal, FunctionVal,
    UNDEFINED, NULL, TRUE, FALSE, boolean, is_truthy, values_equal,
    to_string, type_name,
)

LITERALS = {
    'undefined': UNDEFINED,
    'null': NULL,
    'true': TRUE,
    'false': FALSE,
}


@dataclass
class ReturnSignal:
    """Marks a value produced by ``return`` while it travels to its call."""
    value: RuntimeValue


def unwrap_return(value):
    if isinstance(value, ReturnSignal):
        return value.value
    return value


def stops_sequence(result: Result) -> bool:
    return result.is_err or isinstance(result.value, ReturnSignal)


class Interpreter:
    """Evaluates Quill AST nodes against an environment chain."""
    def __init__(self, debug_level: int = 0, debug_file: str = 'debug.txt'):
        self.debug_level = debug_level
        self.debug_fp: Optional[TextIO] = open(debug_file, 'w', encoding='utf-8') if debug_level > 0 else None

    def debug(self, level: int, msg: str) -> None:
        if self.debug_level >= level and self.debug_fp:
            self.debug_fp.write(msg + '\n')
            self.debug_fp.flush()

    def close(self) -> None:
        if self.debug_fp:
            self.debug_fp.close()
            self.debug_fp = None

    # Public API
    def run(self, program: Program, env: Environment) -> Result:
        self.debug(1, f"evaluate program with {len(program.body)} statements")
        return self.evaluate(program, env)

    def evaluate(self, node: Node, env: Environment) -> Result:
        if isinstance(node, Program):
            return self.eval_statements(node.body, env).map(unwrap_return)
        if isinstance(node, BlockStatement):
            return self.eval_statements(node.body, env)
        if isinstance(node, NumericLiteral):
            return Ok(NumberVal(node.value))
        if isinstance(node, StringLiteral):
            return Ok(StringVal(node.value))
        if isinstance(node, Literal):
            return Ok(LITERALS[node.value])
        if isinstance(node, Identifier):
            value = env.lookup(node.name)
            return Ok(value if value is not None else UNDEFINED)
        if isinstance(node, ArrayLiteral):
            return self.eval_array_literal(node, env)
        if isinstance(node, ObjectLiteral):
            return self.eval_object_literal(node, env)
        if isinstance(node, VarDeclaration):
            return self.eval_var_declaration(node, env)
        if isinstance(node, VarAssignment):
            return self.eval_var_assignment(node, env)
        if isinstance(node, UnaryExpr):
            return self.eval_unary_expr(node, env)
        if isinstance(node, LogicalExpr):
            return self.eval_logical_expr(node, env)
        if isinstance(node, BinaryExpr):
            return self.eval_binary_expr(node, env)
        if isinstance(node, IfStatement):
            return self.eval_if_statement(node, env)
        if isinstance(node, ForStatement):
            return self.eval_for_statement(node, env)
        if isinstance(node, WhileStatement):
            return self.eval_while_statement(node, env)
        if isinstance(node, ReturnStatement):
            if node.argument is None:
                return Ok(ReturnSignal(UNDEFINED))
            return self.evaluate(node.argument, env).map(ReturnSignal)
        if isinstance(node, CallExpr):
            return self.eval_call_expr(node, env)
        if isinstance(node, FunctionDeclaration):
            return self.eval_function_declaration(node, env)
        return Err(UnhandledNodeError(
            node.span, f"This AST node has not been set up for interpretation: {type(node).__name__}"))

    def eval_statements(self, statements: List[Node], env: Environment) -> Result:
        result: Result = Ok(UNDEFINED)
        for stmt in statements:
            result = self.evaluate(stmt, env)
            if stops_sequence(result):
                return result
        return result

    def eval_values(self, nodes: List[Node], env: Environment) -> Result:
        values: List[RuntimeValue] = []
        for node in nodes:
            result = self.evaluate(node, env)
            if result.is_err:
                return result
            values.append(result.value)
        return Ok(values)

    # Literals
    def eval_array_literal(self, node: ArrayLiteral, env: Environment) -> Result:
        return self.eval_values(node.values, env).map(ArrayVal)

    def eval_object_literal(self, node: ObjectLiteral, env: Environment) -> Result:
        properties = {}
        for key, value_node in node.properties.items():
            if value_node is None:
                value = env.lookup(key)
                properties[key] = value if value is not None else UNDEFINED
                continue
            result = self.evaluate(value_node, env)
            if result.is_err:
                return result
            properties[key] = result.value
        return Ok(ObjectVal(properties))

    # Variables
    def eval_var_declaration(self, node: VarDeclaration, env: Environment) -> Result:
        if node.value is None:
            value = UNDEFINED
        else:
            result = self.evaluate(node.value, env)
            if result.is_err:
                return result
            value = result.value
        if not env.declare(node.ident, value):
            return Err(RedeclarationError(node.span, f"Cannot redeclare variable '{node.ident}'"))
        self.debug(2, f"declare {node.ident} = {to_string(value, True)}")
        return Ok(value)

    def eval_var_assignment(self, node: VarAssignment, env: Environment) -> Result:
        result = self.evaluate(node.value, env)
        if result.is_err:
            return result
        if not env.assign(node.ident, result.value):
            return Err(UndeclaredAssignmentError(
                node.span, f"Cannot assign an undeclared variable '{node.ident}'"))
        self.debug(2, f"assign {node.ident} = {to_string(result.value, True)}")
        return result

    # Expressions
    def eval_unary_expr(self, node: UnaryExpr, env: Environment) -> Result:
        result = self.evaluate(node.operand, env)
        if result.is_err:
            return result
        operand = result.value
        if node.prefix == '!':
            return Ok(boolean(not is_truthy(operand)))
        if node.prefix == '-' and isinstance(operand, NumberVal):
            return Ok(NumberVal(-operand.value))
        return Err(TypeMismatchError(
            node.span, f"Cannot apply unary '{node.prefix}' to {type_name(operand)}"))

    def eval_logical_expr(self, node: LogicalExpr, env: Environment) -> Result:
        left = self.evaluate(node.left, env)
        if left.is_err:
            return left
        left_truthy = is_truthy(left.value)
        if node.operator == '&&' and not left_truthy:
            return Ok(FALSE)
        if node.operator == '||' and left_truthy:
            return Ok(TRUE)
        return self.evaluate(node.right, env).map(lambda value: boolean(is_truthy(value)))

    def eval_binary_expr(self, node: BinaryExpr, env: Environment) -> Result:
        left = self.evaluate(node.left, env)
        if left.is_err:
            return left
        right = self.evaluate(node.right, env)
        if right.is_err:
            return right
        return self.apply_binary_op(node, left.value, right.value)

    def apply_binary_op(self, node: BinaryExpr, a: RuntimeValue, b: RuntimeValue) -> Result:
        op = node.operator
        if op in ('==', '!='):
            equal = values_equal(a, b)
            return Ok(boolean(equal if op == '==' else not equal))
        # either side being a string turns + into concatenation
        if op == '+' and (isinstance(a, StringVal) or isinstance(b, StringVal)):
            return Ok(StringVal(to_string(a) + to_string(b)))
        if not (isinstance(a, NumberVal) and isinstance(b, NumberVal)):
            return Err(TypeMismatchError(
                node.span, f"Cannot apply '{op}' to {type_name(a)} and {type_name(b)}"))
        x, y = a.value, b.value
        if op == '+':
            return Ok(NumberVal(x + y))
        if op == '-':
            return Ok(NumberVal(x - y))
        if op == '*':
            return Ok(NumberVal(x * y))
        if op in ('/', '%') and y == 0:
            return Err(DivideByZeroError(node.right.span, 'Cannot divide by 0'))
        if op == '/':
            return Ok(NumberVal(x / y))
        if op == '%':
            # sign follows the dividend
            return Ok(NumberVal(math.nan if math.isinf(x) else math.fmod(x, y)))
        if op == '<':
            return Ok(boolean(x < y))
        if op == '>':
            return Ok(boolean(x > y))
        if op == '<=':
            return Ok(boolean(x <= y))
        if op == '>=':
            return Ok(boolean(x >= y))
        return Err(UnhandledNodeError(node.span, f"Unknown binary operator '{op}'"))

    # Statements
    def eval_if_statement(self, node: IfStatement, env: Environment) -> Result:
        condition = self.evaluate(node.condition, env)
        if condition.is_err:
            return condition
        truthy = is_truthy(condition.value)
        self.debug(3, f"if condition {to_string(condition.value, True)} -> {truthy}")
        if truthy:
            return self.evaluate(node.block, env)
        if node.alternate is not None:
            return self.evaluate(node.alternate, env)
        return Ok(UNDEFINED)

    def eval_while_statement(self, node: WhileStatement, env: Environment) -> Result:
        result: Result = Ok(UNDEFINED)
        while True:
            test = self.evaluate(node.test, env)
            if test.is_err:
                return test
            if not is_truthy(test.value):
                break
            result = self.evaluate(node.block, env)
            if stops_sequence(result):
                return result
        return result

    def eval_for_statement(self, node: ForStatement, env: Environment) -> Result:
        # init, test, update and body all share one loop scope
        loop_env = Environment(parent=env)
        init = self.evaluate(node.init, loop_env)
        if stops_sequence(init):
            return init
        result: Result = Ok(UNDEFINED)
        while True:
            test = self.evaluate(node.test, loop_env)
            if test.is_err:
                return test
            self.debug(3, f"for test {to_string(test.value, True)}")
            if not is_truthy(test.value):
                break
            result = self.evaluate(node.block, loop_env)
            if stops_sequence(result):
                return result
            update = self.evaluate(node.update, loop_env)
            if update.is_err:
                return update
        return result

    # Functions
    def eval_function_declaration(self, node: FunctionDeclaration, env: Environment) -> Result:
        func = FunctionVal(node.name, [p.name for p in node.params], node.block.body, env)
        if not node.is_anonymous:
            if not env.declare(node.name, func):
                return Err(RedeclarationError(node.span, f"Cannot redeclare variable '{node.name}'"))
            self.debug(2, f"define function {node.name}")
        return Ok(func)

    def eval_call_expr(self, node: CallExpr, env: Environment) -> Result:
        callee = self.evaluate(node.callee, env)
        if callee.is_err:
            return callee
        func = callee.value
        if not isinstance(func, FunctionVal):
            return Err(NonFunctionCallError(
                node.callee.span, f"Cannot call non-function value of type {type_name(func)}"))
        args = self.eval_values(node.args, env)
        if args.is_err:
            return args
        return self.call_function(func, args.value, env)

    def call_function(self, func: FunctionVal, args: List[RuntimeValue], env: Environment) -> Result:
        """Invoke ``func`` with already evaluated arguments.

        Missing arguments are bound to ``undefined`` and extra ones are
        dropped. Native functions receive the argument list together
        with the caller's environment.
        """
        self.debug(2, f"call {func!r} with {len(args)} arguments")
        if func.is_native:
            value = func.native(args, env)
            return Ok(value if value is not None else UNDEFINED)
        call_env = Environment(parent=func.env)
        for i, param in enumerate(func.params):
            call_env.declare(param, args[i] if i < len(args) else UNDEFINED)
        return self.eval_statements(func.body, call_env).map(unwrap_return)
