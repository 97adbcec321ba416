"""Simple type checking with optional derivation trees.

Typing failures are returned as :class:`ErrorType` values, never raised, so a
caller can report them and still fall back to untyped evaluation.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from .ast import App, Lam, Term, Var
from .types import Arrow, ErrorType, Type

type Ctx = Mapping[str, Type]

VAR_RULE = "Var"
ABS_RULE = "Abs"
APP_RULE = "App"

_EMPTY_CTX: Ctx = MappingProxyType({})


@dataclass(frozen=True)
class Derivation:
    """One judgment ``ctx ⊢ term : ty`` and the rule that concluded it.

    ``premises`` holds the sub-derivations that were actually computed; when
    checking stops at an error the later premises are absent.
    """

    ctx: Ctx
    term: Term
    ty: Type
    rule: str
    premises: tuple[Derivation, ...] = field(default=())

    # ctx is a mapping proxy, which has no hash
    __hash__ = None  # type: ignore[assignment]


def _extend_ctx(ctx: Ctx, name: str, ty: Type) -> Ctx:
    return MappingProxyType({**ctx, name: ty})


def derive(ctx: Ctx | None, term: Term) -> tuple[Derivation, Type]:
    """Type ``term`` under ``ctx`` and return the derivation alongside the type."""

    ctx = MappingProxyType(dict(ctx)) if ctx else _EMPTY_CTX

    def node(ty: Type, rule: str, *premises: Derivation) -> tuple[Derivation, Type]:
        return Derivation(ctx, term, ty, rule, premises), ty

    match term:
        case Var(name):
            ty = ctx.get(name)
            if ty is None:
                return node(ErrorType(f"unbound variable {name}"), VAR_RULE)
            return node(ty, VAR_RULE)

        case Lam(name, body, domain):
            if domain is None:
                return node(ErrorType(f"missing type annotation for {name}"), ABS_RULE)
            body_deriv, body_ty = derive(_extend_ctx(ctx, name, domain), body)
            if isinstance(body_ty, ErrorType):
                return node(body_ty, ABS_RULE, body_deriv)
            return node(Arrow(domain, body_ty), ABS_RULE, body_deriv)

        case App(fn, arg):
            fn_deriv, fn_ty = derive(ctx, fn)
            if isinstance(fn_ty, ErrorType):
                return node(fn_ty, APP_RULE, fn_deriv)
            if not isinstance(fn_ty, Arrow):
                return node(ErrorType("application of non-function"), APP_RULE, fn_deriv)
            arg_deriv, arg_ty = derive(ctx, arg)
            if isinstance(arg_ty, ErrorType):
                return node(arg_ty, APP_RULE, fn_deriv, arg_deriv)
            if arg_ty != fn_ty.domain:
                return node(
                    ErrorType("argument type mismatch"), APP_RULE, fn_deriv, arg_deriv
                )
            return node(fn_ty.codomain, APP_RULE, fn_deriv, arg_deriv)

    raise TypeError(f"Unexpected term in derive: {term!r}")


def type_of(ctx: Ctx | None, term: Term) -> Type:
    """Compute the simple type of ``term`` under ``ctx``.

    Mirrors :func:`derive` without building the tree.
    """

    ctx = ctx or _EMPTY_CTX
    match term:
        case Var(name):
            ty = ctx.get(name)
            if ty is None:
                return ErrorType(f"unbound variable {name}")
            return ty
        case Lam(name, body, domain):
            if domain is None:
                return ErrorType(f"missing type annotation for {name}")
            body_ty = type_of(_extend_ctx(ctx, name, domain), body)
            if isinstance(body_ty, ErrorType):
                return body_ty
            return Arrow(domain, body_ty)
        case App(fn, arg):
            fn_ty = type_of(ctx, fn)
            if isinstance(fn_ty, ErrorType):
                return fn_ty
            if not isinstance(fn_ty, Arrow):
                return ErrorType("application of non-function")
            arg_ty = type_of(ctx, arg)
            if isinstance(arg_ty, ErrorType):
                return arg_ty
            if arg_ty != fn_ty.domain:
                return ErrorType("argument type mismatch")
            return fn_ty.codomain

    raise TypeError(f"Unexpected term in type_of: {term!r}")


__all__ = ["Ctx", "Derivation", "derive", "type_of", "VAR_RULE", "ABS_RULE", "APP_RULE"]
