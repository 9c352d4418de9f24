"""
Form state for the configuration wizard.

Each form keeps the raw string values typed by the user, the values it
started from, and the inline error for each field. Save is only enabled once
every required field is filled and at least one field differs from its
initial value. A form that fails validation never reaches its submit callback.
"""

from dataclasses import dataclass
import logging
from typing import Any, Callable, Dict, List, Optional

from ..utils.config_models import (
    EMBEDDING_MODEL_NAMES,
    AstraConfig,
    ElasticsearchConfig,
    EmbeddingModelConfig,
    EmbeddingModelProvider,
    PineconeConfig,
    VectorStoreProvider,
)

logger = logging.getLogger(__name__)

MAX_DIMENSIONS = 5000


class ValidationError(ValueError):
    """A form field is missing or holds an invalid value."""

    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message
        super().__init__(f"{field}: {message}")


@dataclass
class FormField:
    name: str
    label: str
    required: bool = False
    initial: str = ""
    secret: bool = False
    options: Optional[List[str]] = None
    validate: Optional[Callable[[str], None]] = None


def validate_dimensions(value: str):
    """Dimensions are optional, but must be an integer in 1..5000 when given."""
    if value == "":
        return
    try:
        dimensions = int(value)
    except ValueError:
        dimensions = None
    if dimensions is None or dimensions <= 0 or dimensions > MAX_DIMENSIONS:
        raise ValidationError(
            "dimensions",
            f"Dimensions must be an integer between 1 and {MAX_DIMENSIONS}.",
        )


def _optional_int(value: str) -> Optional[int]:
    return int(value) if value else None


def _optional_str(value: str) -> Optional[str]:
    return value or None


class FormState:
    """
    The values, errors and submit state of one configuration form.

    Args:
        fields (List[FormField]): The fields shown by the form, in order.
        build (Callable): Turns the validated values into a config object.
    """

    def __init__(
        self,
        fields: List[FormField],
        build: Callable[[Dict[str, str]], Any],
    ):
        self.fields = {f.name: f for f in fields}
        self.values = {f.name: f.initial for f in fields}
        self.errors: Dict[str, str] = {}
        self._build = build

    def _field_error(self, name: str) -> Optional[str]:
        field = self.fields[name]
        value = self.values[name]
        if value == "":
            return f"{field.label} is required." if field.required else None
        if field.options and value not in field.options:
            return f"{field.label} must be one of: {', '.join(field.options)}."
        if field.validate:
            try:
                field.validate(value)
            except ValidationError as e:
                return e.message
        return None

    def set(self, name: str, value: str):
        """Updates a field and re-runs its own checks, except the required one."""
        self.values[name] = value
        self.errors.pop(name, None)
        if value == "":
            return
        error = self._field_error(name)
        if error:
            self.errors[name] = error

    @property
    def is_dirty(self) -> bool:
        return any(self.values[n] != f.initial for n, f in self.fields.items())

    @property
    def required_filled(self) -> bool:
        return all(self.values[n] != "" for n, f in self.fields.items() if f.required)

    @property
    def can_submit(self) -> bool:
        return self.is_dirty and self.required_filled

    def validate(self) -> Dict[str, str]:
        errors = {}
        for name in self.fields:
            error = self._field_error(name)
            if error:
                errors[name] = error
        return errors

    def submit(self, on_submit: Callable[[Any], None]) -> bool:
        """
        Validates the form and passes the built config to `on_submit`.

        Returns:
            bool: True if the config was submitted.
        """
        if not self.can_submit:
            logger.debug("Form submit ignored: required fields empty or unchanged.")
            return False

        self.errors = self.validate()
        if self.errors:
            logger.debug(f"Form validation failed for fields: {sorted(self.errors)}")
            return False

        on_submit(self._build(self.values))
        return True


def pinecone_form() -> FormState:
    return FormState(
        [
            FormField("api_key", "API Key", required=True, secret=True),
            FormField("index_name", "Index Name", required=True),
        ],
        build=lambda v: PineconeConfig(api_key=v["api_key"], index_name=v["index_name"]),
    )


def astra_form() -> FormState:
    return FormState(
        [
            FormField("token", "Token", required=True, secret=True),
            FormField("endpoint", "Endpoint", required=True),
            FormField("collection", "Collection", required=True),
            FormField("dimensions", "Dimensions", validate=validate_dimensions),
            FormField(
                "similarity_metric",
                "Metric",
                initial="cosine",
                options=["cosine", "euclidean", "dot_product"],
            ),
        ],
        build=lambda v: AstraConfig(
            token=v["token"],
            endpoint=v["endpoint"],
            collection=v["collection"],
            dimensions=_optional_int(v["dimensions"]),
            similarity_metric=_optional_str(v["similarity_metric"]),
        ),
    )


def elasticsearch_form() -> FormState:
    return FormState(
        [
            FormField("url", "URL", required=True),
            FormField("index_name", "Index Name", required=True),
            FormField("api_key", "API Key", required=True, secret=True),
            FormField("engine", "KNN Engine", initial="hnsw", options=["hnsw"]),
            FormField(
                "similarity_metric",
                "Similarity Metric",
                initial="cosine",
                options=["l2_norm", "dot_product", "cosine"],
            ),
        ],
        build=lambda v: ElasticsearchConfig(
            url=v["url"],
            index_name=v["index_name"],
            api_key=v["api_key"],
            engine=_optional_str(v["engine"]),
            similarity_metric=_optional_str(v["similarity_metric"]),
        ),
    )


VECTOR_STORE_FORMS = {
    VectorStoreProvider.PINECONE: pinecone_form,
    VectorStoreProvider.ASTRA: astra_form,
    VectorStoreProvider.ELASTICSEARCH: elasticsearch_form,
}


def embedding_model_form(provider: EmbeddingModelProvider) -> FormState:
    """
    Builds the embedding model form for `provider`.

    The provider is picked outside the form, so only its model names are
    offered and the built config always carries it.
    """
    model_names = EMBEDDING_MODEL_NAMES[provider]
    return FormState(
        [
            FormField(
                "model_name",
                "Model",
                required=True,
                initial=model_names[0],
                options=model_names,
            ),
            FormField("api_key", "API Key", required=True, secret=True),
            FormField("dimensions", "Dimensions", validate=validate_dimensions),
        ],
        build=lambda v: EmbeddingModelConfig(
            provider=provider,
            model_name=v["model_name"],
            api_key=v["api_key"],
            dimensions=_optional_int(v["dimensions"]),
        ),
    )
