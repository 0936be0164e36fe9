from enum import IntEnum


class IntEnum2(IntEnum):
    def __str__(self):
        return self.name

    def __repr__(self):
        return self.__str__()


class ConversionStep(IntEnum2):
    '''Stages of one conversion, in the order the orchestrator runs them'''

    VerifyInputExists       = 1
    VerifyInterpreterExists = 2
    ReadSource              = 3
    Escape                  = 4
    AllocateTempSourceFile  = 5
    GenerateWrapper         = 6
    Compile                 = 7
    VerifyArtifact          = 8


__all__ = [
    'IntEnum2',
    'ConversionStep',
]
