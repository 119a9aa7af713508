class GolfGamesError(ValueError):
    """Base error for anything the scoring engine refuses to do."""


class InvalidGameConfig(GolfGamesError):
    pass


class InvalidPress(GolfGamesError):
    pass


class InvalidHole(GolfGamesError):
    pass


class UnknownGolfer(GolfGamesError):
    pass
