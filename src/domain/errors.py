class SongParseError(ValueError):
    """Erro base para falhas de análise do formato de texto."""


class MissingFieldError(SongParseError):
    """Campo obrigatório do cabeçalho ausente."""

    def __init__(self, field: str) -> None:
        super().__init__(f'Campo obrigatório ausente: {field}')
        self.field: str = field


class BpmParseError(SongParseError):
    """Valor de `#BPM` que não é um número decimal."""

    def __init__(self, value: str) -> None:
        super().__init__(f'BPM inválido: {value!r}')
        self.value: str = value


class IntegerParseError(SongParseError):
    """Campo numérico que não pôde ser convertido para inteiro."""

    def __init__(self, field: str, value: str) -> None:
        super().__init__(f'Inteiro inválido em {field}: {value!r}')
        self.field: str = field
        self.value: str = value


class UnknownNoteTypeError(SongParseError):
    def __init__(self, marker: str) -> None:
        super().__init__(f'Tipo de nota desconhecido: {marker!r}')
        self.marker: str = marker


class MalformedNoteLineError(SongParseError):
    """Linha de nota com menos campos do que o tipo exige."""

    def __init__(self, field: str) -> None:
        super().__init__(f'Linha de nota sem o campo {field}')
        self.field: str = field


class InvalidRelativeFlagError(SongParseError):
    def __init__(self, value: str) -> None:
        super().__init__(f'Valor inválido para #RELATIVE: {value!r}')
        self.value: str = value
