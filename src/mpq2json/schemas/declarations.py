"""JASS declaration models."""

from __future__ import annotations

from typing import Literal, Union

from pydantic import BaseModel, Field


class _Declaration(BaseModel):
    name: str
    description: str | None = None
    source: str | None = None


class Param(BaseModel):
    """A ``takes`` entry of a native or function."""

    type: str
    name: str
    description: str | None = None
    isNullable: bool | None = None


class TypeDeclaration(_Declaration):
    symbol: Literal["type"] = "type"
    extends: str


class GlobalDeclaration(_Declaration):
    symbol: Literal["global"] = "global"
    isConstant: bool = False
    type: str
    isArray: bool = False
    value: str | None = None
    isNullable: bool | None = None


class NativeDeclaration(_Declaration):
    symbol: Literal["native"] = "native"
    takes: list[Param] = Field(default_factory=list)
    returns: str
    isNullable: bool | None = None


class FunctionDeclaration(_Declaration):
    symbol: Literal["function"] = "function"
    takes: list[Param] = Field(default_factory=list)
    returns: str
    isNullable: bool | None = None


Declaration = Union[TypeDeclaration, GlobalDeclaration, NativeDeclaration, FunctionDeclaration]
