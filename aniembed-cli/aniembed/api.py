import logging

from fastapi import Depends, FastAPI, HTTPException, Path
from fastapi.middleware.cors import CORSMiddleware

from .config import LOG_FORMAT, LOG_LEVEL, __version__
from .errors import ExtractionError, FetchError
from .extractor import EmbedExtractor
from .models import MappingEnvelope

logger = logging.getLogger(__name__)

extractor = EmbedExtractor()


def get_extractor() -> EmbedExtractor:
    return extractor


app = FastAPI(
    title="aniembed API",
    description="Embed server lookup for anime episodes",
    version=__version__,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def extraction_failed(error: Exception) -> HTTPException:
    return HTTPException(status_code=400, detail=f"Failed to extract embed data: {error}")


@app.get("/health")
async def health_check(embed: EmbedExtractor = Depends(get_extractor)):
    return {"status": "ok", "source": embed.get_source_name(), "baseUrl": embed.base_url}


@app.get("/embed/{episode_id}", response_model=MappingEnvelope, response_model_exclude_none=True)
async def get_embed(
    episode_id: str = Path(..., min_length=1),
    embed: EmbedExtractor = Depends(get_extractor),
):
    try:
        return await embed.get_embed_with_mapping(episode_id)
    except (FetchError, ExtractionError) as e:
        logger.error(f"Error extracting embed data for {episode_id}: {e}")
        raise extraction_failed(e)


@app.get("/embed/{data_id}/{season}/{episode}", response_model=MappingEnvelope, response_model_exclude_none=True)
async def get_embed_by_data_id_and_episode(
    data_id: str = Path(..., min_length=1),
    season: int = Path(..., ge=1),
    episode: int = Path(..., ge=1),
    embed: EmbedExtractor = Depends(get_extractor),
):
    try:
        return await embed.get_embed_by_data_id_and_episode(data_id, season, episode)
    except (FetchError, ExtractionError) as e:
        logger.error(f"Error extracting embed data by data_id and episode: {e}")
        raise extraction_failed(e)


@app.get("/embed/{data_id}/{season}", response_model=MappingEnvelope, response_model_exclude_none=True)
async def get_embed_by_data_id(
    data_id: str = Path(..., min_length=1),
    season: int = Path(..., ge=1),
    embed: EmbedExtractor = Depends(get_extractor),
):
    try:
        return await embed.get_embed_by_data_id(data_id, season)
    except (FetchError, ExtractionError) as e:
        logger.error(f"Error extracting embed data by data_id: {e}")
        raise extraction_failed(e)


def serve(host: str = "0.0.0.0", port: int = 8000):
    import uvicorn

    logging.basicConfig(level=LOG_LEVEL or "INFO", format=LOG_FORMAT)
    uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    serve()
