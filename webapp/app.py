import contextlib
import logging

from databases import Database
from rich.logging import RichHandler
from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.middleware.authentication import AuthenticationMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.routing import Route

from cookbook.errors import NotAllowed, RecipeNotFound
from cookbook.repository import RecipeRepository, RecipesRepository, create_db
from cookbook.services import generate_recipe_pdf, get_recipe
from webapp import config
from webapp.auth import DevTokenBackend, requester_from


CONFIG = config.Config()


logging.basicConfig(
    level=CONFIG.log_level,
    format="%(message)s",
    handlers=[RichHandler(rich_tracebacks=CONFIG.env == config.Env.local)],
)
logger = logging.getLogger(__name__)


async def recipe_detail(request: Request) -> JSONResponse:
    repo: RecipeRepository = request.app.state.repo
    recipe = await get_recipe(
        request.path_params["id"],
        repository=repo,
        requester=requester_from(request),
    )
    return JSONResponse(recipe.model_dump(mode="json"))


async def recipe_pdf(request: Request) -> Response:
    repo: RecipeRepository = request.app.state.repo
    pdf = await generate_recipe_pdf(
        request.path_params["id"],
        repository=repo,
        requester=requester_from(request),
    )
    return Response(
        pdf.buffer,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{pdf.filename}"'},
    )


async def not_found(request: Request, exc: Exception) -> JSONResponse:
    return JSONResponse({"message": "Recipe not found."}, status_code=404)


async def not_allowed(request: Request, exc: Exception) -> JSONResponse:
    return JSONResponse({"message": str(exc)}, status_code=403)


def create_app(
    cfg: config.Config,
    *,
    db: Database | None = None,
    repo: RecipeRepository | None = None,
) -> Starlette:
    """Wire the app. Pass `repo` to skip the database entirely."""
    if repo is None:
        db = Database(cfg.db_url) if db is None else db
        repo = RecipesRepository(db)

    @contextlib.asynccontextmanager
    async def lifespan(app: Starlette):
        if db is None:
            yield
            return
        await db.connect()
        await create_db(db)
        logger.info("Connected to %s", cfg.db_url)
        yield
        await db.disconnect()

    app = Starlette(
        debug=True if cfg.env == config.Env.local else False,
        routes=[
            Route("/recipes/{id}", recipe_detail),
            Route("/recipes/{id}/pdf", recipe_pdf),
        ],
        middleware=[
            Middleware(
                AuthenticationMiddleware,
                backend=DevTokenBackend(cfg.dev_tokens),
            )
        ],
        exception_handlers={
            RecipeNotFound: not_found,
            NotAllowed: not_allowed,
        },
        lifespan=lifespan,
    )
    app.state.repo = repo
    return app


app = create_app(CONFIG)
