"""Saved-recipes store.

Keeps the user's favourite recipes in a single storage slot as a JSON array,
mirroring the browser local-storage model of the web client:

- the collection is loaded lazily on first use
- every mutation re-serializes the whole collection and overwrites the slot
- read/parse failures degrade to an empty collection, write failures are
  logged and the in-memory collection stays authoritative

Recipes are keyed by identity (id when present, else title). The storage
backend is injected so tests and the CLI can swap in-memory for file storage.
"""

import json
import threading
from pathlib import Path
from typing import Literal, Optional, Protocol

from pydantic import TypeAdapter, ValidationError

from src.models.models import Recipe
from src.utils.logger import logger

STORAGE_KEY = "smart-recipe-saved-recipes"

_recipe_list_adapter = TypeAdapter(list[Recipe])


class StorageBackend(Protocol):
    """Key/value text storage (local-storage shaped)."""

    def get_item(self, key: str) -> Optional[str]: ...

    def set_item(self, key: str, value: str) -> None: ...

    def remove_item(self, key: str) -> None: ...


class InMemoryStorage:
    """Process-local storage, used by tests and stateless runs."""

    def __init__(self, initial: Optional[dict[str, str]] = None) -> None:
        self._items: dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)


class FileStorage:
    """One file per key under a directory (<directory>/<key>.json)."""

    def __init__(self, directory: str | Path) -> None:
        self.directory = Path(directory)

    def _path(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def get_item(self, key: str) -> Optional[str]:
        path = self._path(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set_item(self, key: str, value: str) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        # Replace atomically; readers never see a partial file
        tmp_path = self._path(key).with_suffix(".json.tmp")
        tmp_path.write_text(value, encoding="utf-8")
        tmp_path.replace(self._path(key))

    def remove_item(self, key: str) -> None:
        self._path(key).unlink(missing_ok=True)


def _serialize(recipes: list[Recipe]) -> str:
    return json.dumps([recipe.to_wire() for recipe in recipes], indent=2, ensure_ascii=False)


class SavedRecipesStore:
    """Collection of saved recipes with toggle/remove/clear/export/import.

    Invariant: no two entries share an identity. Mutations take a lock so
    concurrent request handlers cannot interleave read-modify-write cycles.
    """

    def __init__(self, storage: StorageBackend, storage_key: str = STORAGE_KEY) -> None:
        self.storage = storage
        self.storage_key = storage_key
        self._recipes: list[Recipe] = []
        self._loaded = False
        self._lock = threading.RLock()

    def _ensure_loaded(self) -> None:
        if self._loaded:
            return
        self._loaded = True
        try:
            stored = self.storage.get_item(self.storage_key)
            if stored:
                self._recipes = _recipe_list_adapter.validate_json(stored)
                logger.info(f"Loaded {len(self._recipes)} saved recipes")
        except (OSError, ValueError) as e:
            # ValidationError is a ValueError: malformed JSON or wrong shape
            logger.error(f"Error loading saved recipes: {e}")
            self._recipes = []

    def _persist(self) -> None:
        try:
            self.storage.set_item(self.storage_key, _serialize(self._recipes))
        except OSError as e:
            logger.error(f"Error saving recipes: {e}")

    @property
    def saved_recipes(self) -> list[Recipe]:
        """Snapshot of the collection in insertion order."""
        with self._lock:
            self._ensure_loaded()
            return list(self._recipes)

    def save_recipe(self, recipe: Recipe) -> bool:
        """Toggle a recipe: remove it if saved (all matches), otherwise append it.

        Returns:
            True if the recipe is saved after the call, False if it was removed.
        """
        with self._lock:
            self._ensure_loaded()
            identity = recipe.identity
            if any(saved.identity == identity for saved in self._recipes):
                self._recipes = [saved for saved in self._recipes if saved.identity != identity]
                is_saved = False
                logger.info(f"Removed saved recipe: {recipe.title}")
            else:
                self._recipes = [*self._recipes, recipe]
                is_saved = True
                logger.info(f"Saved recipe: {recipe.title}")
            self._persist()
            return is_saved

    def remove_recipe(self, key: int | str, mode: Literal["id", "title"] = "id") -> int:
        """Remove every recipe whose id (mode="id") or title (mode="title") equals key.

        Returns:
            Number of removed entries.
        """
        if mode not in ("id", "title"):
            raise ValueError(f"mode must be 'id' or 'title', got: {mode}")

        with self._lock:
            self._ensure_loaded()
            if mode == "id":
                kept = [recipe for recipe in self._recipes if recipe.id != key]
            else:
                kept = [recipe for recipe in self._recipes if recipe.title != key]
            removed = len(self._recipes) - len(kept)
            self._recipes = kept
            self._persist()
            return removed

    def is_recipe_saved(self, recipe: Recipe) -> bool:
        with self._lock:
            self._ensure_loaded()
            identity = recipe.identity
            return any(saved.identity == identity for saved in self._recipes)

    def clear_all_saved_recipes(self) -> None:
        with self._lock:
            self._ensure_loaded()
            self._recipes = []
            self._persist()
            logger.info("Cleared all saved recipes")

    def get_saved_recipe_count(self) -> int:
        with self._lock:
            self._ensure_loaded()
            return len(self._recipes)

    def export_saved_recipes(self) -> str:
        """Serialize the collection as pretty-printed JSON (same shape as storage)."""
        with self._lock:
            self._ensure_loaded()
            return _serialize(self._recipes)

    def import_saved_recipes(self, text: str) -> bool:
        """Replace the collection with a JSON array of recipes.

        Returns:
            True on success. False if the text is not JSON, not an array, or an
            element is not a valid recipe; the collection is left untouched.
        """
        try:
            parsed = json.loads(text)
        except (json.JSONDecodeError, TypeError) as e:
            logger.error(f"Error importing recipes: {e}")
            return False

        if not isinstance(parsed, list):
            logger.warning("Import rejected: expected a JSON array of recipes")
            return False

        try:
            recipes = _recipe_list_adapter.validate_python(parsed)
        except ValidationError as e:
            logger.warning(f"Import rejected: invalid recipe data ({e.error_count()} errors)")
            return False

        unique: dict[tuple, Recipe] = {}
        for recipe in recipes:
            unique.setdefault(recipe.identity, recipe)
        recipes = list(unique.values())

        with self._lock:
            self._loaded = True
            self._recipes = recipes
            self._persist()
        logger.info(f"Imported {len(recipes)} saved recipes")
        return True
