class CookbookError(Exception):
    pass


class RecipeNotFound(CookbookError):
    pass


class NotAllowed(CookbookError):
    pass
