'''Conversion error taxonomy'''

from typing import Optional
from .enum import ConversionStep


class ConversionError(Exception):
    '''A conversion step failed; terminal for the current invocation'''

    step: ConversionStep = None
    hint: Optional[str] = None

    def __init__(self, message: str, path: Optional[str] = None, reason: Optional[str] = None, hint: Optional[str] = None):
        self.message = message
        self.path = path
        self.reason = reason
        if hint is not None:
            self.hint = hint

        super().__init__(self.describe())

    def describe(self) -> str:
        text = self.message
        if self.reason:
            text = f'{text}: {self.reason}'

        return text

    @classmethod
    def from_os_error(cls, message: str, error: OSError, path: Optional[str] = None):
        return cls(message, path = path or error.filename, reason = error.strerror or str(error))


class InputNotFound(ConversionError):
    step = ConversionStep.VerifyInputExists


class InterpreterNotFound(ConversionError):
    step = ConversionStep.VerifyInterpreterExists
    hint = 'Install Python 3, or pass --interpreter / set "interpreter" in config.json5'


class ReadFailure(ConversionError):
    step = ConversionStep.ReadSource


class AllocationFailure(ConversionError):
    step = ConversionStep.ReadSource


class EscapeFailure(ConversionError):
    step = ConversionStep.Escape


class TempFileFailure(ConversionError):
    step = ConversionStep.AllocateTempSourceFile


class GenerationFailure(ConversionError):
    step = ConversionStep.GenerateWrapper


class CompileFailure(ConversionError):
    step = ConversionStep.Compile


class ArtifactMissing(ConversionError):
    step = ConversionStep.VerifyArtifact


__all__ = [
    'ConversionError',
    'InputNotFound',
    'InterpreterNotFound',
    'ReadFailure',
    'AllocationFailure',
    'EscapeFailure',
    'TempFileFailure',
    'GenerationFailure',
    'CompileFailure',
    'ArtifactMissing',
]
