"""Erros de criptografia de votos de enquete.

Uso interno do decryptor: nunca chega ao payload nem ao chamador HTTP.
"""


class PollDecryptionError(Exception):
    """Nenhum candidato de AAD autenticou o voto."""

    def __init__(self, message: str, *, attempted: tuple[str, ...] = ()) -> None:
        super().__init__(message)
        self.attempted = attempted
