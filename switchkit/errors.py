class ParseError(ValueError):
    """
    Raised when a token stream does not satisfy the declared switches.
    """

    def __init__(self, msg: str) -> None:
        super().__init__(msg)
        self.msg = msg

    def __str__(self) -> str:
        return self.msg
