"""
Entity schemas for the TV catalog.

Each entity type is described by an ``EntityDefinition``: where it lives in the
URL space, which field identifies it, which second field is mandatory on
create, and the pydantic models that validate create and update payloads.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal, DecimalException
from typing import Annotated, Any, Dict, List, Optional, Type

from boto3.dynamodb.types import DYNAMODB_CONTEXT
from pydantic import BaseModel, ConfigDict, Field, field_validator

ID_FIELD = 'id'
CREATED_AT_FIELD = 'createdAt'
UPDATED_AT_FIELD = 'updatedAt'

# Fields the write path owns; never taken from an update payload
SYSTEM_FIELDS = frozenset({ID_FIELD, CREATED_AT_FIELD, UPDATED_AT_FIELD})


def utc_timestamp(moment: Optional[datetime] = None) -> str:
    """Render a moment as ISO-8601 UTC with millisecond precision, e.g. 2024-01-01T12:00:00.000Z."""
    moment = moment or datetime.now(timezone.utc)
    return moment.astimezone(timezone.utc).isoformat(timespec='milliseconds').replace('+00:00', 'Z')


class _EntityPayload(BaseModel):
    model_config = ConfigDict(extra='ignore', allow_inf_nan=False)

    @field_validator('*')
    @classmethod
    def validate_storable_number(cls, v: Any) -> Any:
        """Reject numbers outside DynamoDB's range of 38 significant digits."""
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            try:
                DYNAMODB_CONTEXT.create_decimal(Decimal(repr(v)) if isinstance(v, float) else v)
            except DecimalException:
                raise ValueError('Number cannot be stored in DynamoDB')
        return v


class CreateActorRequest(_EntityPayload):
    """Request model for creating an actor."""

    id: Annotated[str, Field(
        min_length=1,
        description='Unique identifier of the actor',
        examples=['actor-1'],
    )]

    name: Annotated[str, Field(
        min_length=1,
        description='Full name of the actor',
        examples=['Bryan Cranston'],
    )]

    age: Annotated[Optional[int], Field(
        ge=0,
        description='Age in years',
    )] = None

    nationality: Annotated[Optional[str], Field(
        description='Nationality of the actor',
        examples=['American'],
    )] = None

    knownFor: Annotated[List[str], Field(
        default_factory=list,
        description='Shows or movies the actor is known for',
        examples=[['Breaking Bad', 'Malcolm in the Middle']],
    )]

    isActive: Annotated[bool, Field(
        description='Whether the actor is still working',
    )] = True


class UpdateActorRequest(_EntityPayload):
    """Request model for updating an actor; every field is optional."""

    name: Annotated[Optional[str], Field(min_length=1)] = None
    age: Annotated[Optional[int], Field(ge=0)] = None
    nationality: Optional[str] = None
    knownFor: Optional[List[str]] = None
    isActive: Optional[bool] = None


class CreateTvShowRequest(_EntityPayload):
    """Request model for creating a TV show."""

    id: Annotated[str, Field(
        min_length=1,
        description='Unique identifier of the TV show',
        examples=['show-1'],
    )]

    title: Annotated[str, Field(
        min_length=1,
        description='Title of the TV show',
        examples=['Breaking Bad'],
    )]

    genre: Annotated[Optional[str], Field(
        description='Genre of the TV show',
        examples=['Drama'],
    )] = None

    year: Annotated[Optional[int], Field(
        description='Year the show first aired',
        examples=[2008],
    )] = None

    seasons: Annotated[Optional[int], Field(
        ge=0,
        description='Number of seasons',
    )] = None

    rating: Annotated[Optional[float], Field(
        description='Average rating',
        examples=[9.5],
    )] = None


class UpdateTvShowRequest(_EntityPayload):
    """Request model for updating a TV show; every field is optional."""

    title: Annotated[Optional[str], Field(min_length=1)] = None
    genre: Optional[str] = None
    year: Optional[int] = None
    seasons: Annotated[Optional[int], Field(ge=0)] = None
    rating: Optional[float] = None


@dataclass(frozen=True)
class EntityDefinition:
    """Static description of one entity type served by the CRUD handler."""

    name: str
    label: str
    collection: str
    required_field: str
    create_model: Type[BaseModel]
    update_model: Type[BaseModel]
    id_field: str = ID_FIELD

    @property
    def collection_path(self) -> str:
        return f"/{self.collection}"

    @property
    def item_path(self) -> str:
        return f"/{self.collection}/{{{self.id_field}}}"


ACTORS = EntityDefinition(
    name='actors',
    label='Actor',
    collection='actors',
    required_field='name',
    create_model=CreateActorRequest,
    update_model=UpdateActorRequest,
)

TV_SHOWS = EntityDefinition(
    name='tvshows',
    label='TV show',
    collection='tvshows',
    required_field='title',
    create_model=CreateTvShowRequest,
    update_model=UpdateTvShowRequest,
)

ENTITY_DEFINITIONS: Dict[str, EntityDefinition] = {
    ACTORS.name: ACTORS,
    TV_SHOWS.name: TV_SHOWS,
}


def get_entity_definition(name: str) -> EntityDefinition:
    """
    Look up an entity definition by name.

    Raises:
        KeyError: If no entity type is registered under ``name``
    """
    return ENTITY_DEFINITIONS[name.lower()]
