import asyncio
import logging
import traceback
from http import HTTPStatus
from typing import Annotated

from fastapi import Depends, FastAPI, HTTPException

from nanoid_server.alphabets import ALPHABETS, get_alphabet
from nanoid_server.config import Settings, get_settings
from nanoid_server.errors import InvalidResultBufferSizeError, NanoidError
from nanoid_server.logging import setup_logging
from nanoid_server.metrics import setup_metrics
from nanoid_server.model import (
    CUSTOM_ALPHABET_NAME,
    AlphabetInfo,
    AlphabetListResponse,
    NanoidRequest,
    NanoidResponse,
)
from nanoid_server.nanoid import compute_mask, generate, generate_iterative
from nanoid_server.random_source import CountingRandom, get_secure_random
from nanoid_server.trace import setup_tracing
from nanoid_server.utils import (
    nanoid_span,
    set_attribute_alphabet,
    set_attribute_response,
)

# Generator per strategy name.
GENERATORS = {
    "batched": generate,
    "iterative": generate_iterative,
}
# Status code for requests the generator rejects.
STATUS_CODE_INVALID = HTTPStatus.UNPROCESSABLE_ENTITY
# Status code for unexpected errors.
# This is used when the server encounters an error that is not handled
STATUS_CODE_EXCEPTION = HTTPStatus.INTERNAL_SERVER_ERROR

logger = logging.getLogger(__name__)


def get_random():
    """Random source shared by all requests, overridable in tests."""
    return get_secure_random()


def get_app() -> FastAPI:
    # Get settings when creating app.
    settings = get_settings()
    setup_logging(settings.logging)
    app = FastAPI(
        title="Nanoid Server",
        description="Hands out short, URL-safe, random unique identifiers "
        + "generated by unbiased masked rejection sampling.",
    )
    # Setup metrics if enabled
    setup_metrics(app, settings.metrics)

    # Setup trace (this will also instrument FastAPI)
    setup_tracing(app, settings.tracing)

    return app


# Default app.
app = get_app()


def resolve_alphabet(req: NanoidRequest, settings: Settings) -> tuple[str, bytes]:
    """Return the name and symbols of the alphabet a request asks for."""
    if req.custom_alphabet is not None:
        return CUSTOM_ALPHABET_NAME, req.custom_alphabet.encode("ascii")
    name = req.alphabet or settings.default_alphabet
    return name, get_alphabet(name)


def run_generation(rng, req: NanoidRequest, settings: Settings) -> NanoidResponse:
    """Generate the requested ids inside a traced span."""
    size = req.size or settings.default_size
    strategy = req.strategy or settings.default_strategy
    alphabet_name = (
        CUSTOM_ALPHABET_NAME
        if req.custom_alphabet is not None
        else req.alphabet or settings.default_alphabet
    )
    generator = GENERATORS[strategy]
    counting_rng = CountingRandom(rng)

    with nanoid_span(strategy, alphabet_name, size, req.count) as span:
        if size > settings.max_size:
            raise InvalidResultBufferSizeError(size, settings.max_size)

        alphabet_name, alphabet = resolve_alphabet(req, settings)
        set_attribute_alphabet(span, alphabet)

        ids = [
            generator(counting_rng, alphabet, size).decode("ascii")
            for _ in range(req.count)
        ]
        set_attribute_response(span, ids, counting_rng)

    return NanoidResponse(
        alphabet=alphabet_name,
        alphabet_length=len(alphabet),
        size=size,
        strategy=strategy,
        data=ids,
    )


@app.post("/api/v1/nanoids", response_model=NanoidResponse)
async def create_nanoids(
    req: NanoidRequest,
    rng: Annotated[object, Depends(get_random)],
    settings: Annotated[Settings, Depends(get_settings)],
):
    """Generates ``count`` nanoids of ``size`` symbols from the chosen alphabet."""
    if req.count > settings.max_count:
        raise HTTPException(
            status_code=STATUS_CODE_INVALID,
            detail=f"Count ({req.count}) must be between 1 and {settings.max_count}",
        )

    try:
        return await asyncio.to_thread(run_generation, rng, req, settings)
    except NanoidError as e:
        logger.warning("Rejected nanoid request: %s", e)
        raise HTTPException(status_code=STATUS_CODE_INVALID, detail=str(e))
    except Exception:
        # Catch any other unexpected errors
        error_str = traceback.format_exc()
        raise HTTPException(status_code=STATUS_CODE_EXCEPTION, detail=error_str)


@app.get("/api/v1/alphabets", response_model=AlphabetListResponse)
async def list_alphabets():
    """Lists the predefined alphabets."""
    return AlphabetListResponse(
        data=[
            AlphabetInfo(
                name=name,
                alphabet=alphabet.decode("ascii"),
                length=len(alphabet),
                mask=compute_mask(len(alphabet)),
            )
            for name, alphabet in ALPHABETS.items()
        ]
    )


@app.get("/health")
async def health():
    return "ok"
