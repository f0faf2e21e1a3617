"""
Builder Session — machine d'état d'édition d'une page.

États : idle (aucune page) → loaded (page_id éventuellement None tant que la
page n'a jamais été sauvegardée, components, sélection).

Toutes les éditions sont synchrones et en mémoire ; la persistance passe par
save(), explicite. Les saves sont sérialisés : un save démarré pendant qu'un
autre est en vol attend, puis envoie l'état le plus récent. Un échec laisse
l'état intact, ajoute une notice et remonte l'erreur à l'appelant.

Le store injecté expose list / get / create / update / delete
(src.store.PageStore en local, src.client.PagesClient à distance).
"""
import logging
import threading
from dataclasses import dataclass
from typing import List, Optional, Protocol

import pydantic

from page_builder import EXPORT_FILENAME, CanvasLinks, create_component, export_page, render_canvas
from page_builder.core.schemas import COMPONENT_TYPES, ComponentStyle, PageComponent, PageConfig

from .errors import BuilderError, NotFoundError, ValidationError

log = logging.getLogger(__name__)

DEFAULT_TITLE = "Untitled"
_EDITABLE_FIELDS = {"content", "style", "order", "position"}


class PageStoreProtocol(Protocol):
    def list(self) -> List[PageConfig]: ...
    def get(self, page_id: str) -> PageConfig: ...
    def create(self, name: str, components=None) -> PageConfig: ...
    def update(self, page_id: str, name: Optional[str] = None, components=None) -> PageConfig: ...
    def delete(self, page_id: str) -> None: ...


@dataclass
class Notice:
    level:       str          # "success" | "error" | "info"
    title:       str
    description: str = ""


class BuilderSession:
    def __init__(self, store: PageStoreProtocol):
        self.store = store
        self.loaded = False
        self.page_id: Optional[str] = None
        self.title = DEFAULT_TITLE
        self.components: List[PageComponent] = []
        self.selected_id: Optional[str] = None
        self.pages: List[PageConfig] = []
        self.notices: List[Notice] = []
        self._save_lock = threading.Lock()

    # ── Lecture ─────────────────────────────────────────────────────────────

    @property
    def state(self) -> str:
        return "loaded" if self.loaded else "idle"

    @property
    def selected(self) -> Optional[PageComponent]:
        return self._find(self.selected_id) if self.selected_id else None

    @property
    def can_delete_page(self) -> bool:
        return len(self.pages) > 1

    @property
    def export_filename(self) -> str:
        return EXPORT_FILENAME

    def _find(self, component_id: str) -> Optional[PageComponent]:
        return next((c for c in self.components if c.id == component_id), None)

    def _index(self, component_id: str) -> int:
        for i, c in enumerate(self.components):
            if c.id == component_id:
                return i
        raise NotFoundError(f"Composant {component_id} introuvable")

    def _notify(self, level: str, title: str, description: str = "") -> None:
        self.notices.append(Notice(level, title, description))

    def dismiss(self, index: int) -> None:
        del self.notices[index]

    # ── Pages ───────────────────────────────────────────────────────────────

    def refresh_pages(self) -> List[PageConfig]:
        self.pages = self.store.list()
        return self.pages

    def open(self) -> None:
        """Premier chargement : liste des pages, puis la première si elle existe."""
        self.refresh_pages()
        if self.pages and not self.loaded:
            self.load_page(self.pages[0])

    def load_page(self, page: PageConfig) -> None:
        self.page_id = page.id
        self.title = page.name
        self.components = [c.model_copy(deep=True) for c in page.components]
        self.selected_id = None
        self.loaded = True

    def new_page(self, name: str = DEFAULT_TITLE) -> None:
        """Page locale non sauvegardée ; le premier save() la crée."""
        self.page_id = None
        self.title = name
        self.components = []
        self.selected_id = None
        self.loaded = True

    def _reset(self) -> None:
        self.loaded = False
        self.page_id = None
        self.title = DEFAULT_TITLE
        self.components = []
        self.selected_id = None

    def _cache(self, page: PageConfig) -> None:
        for i, p in enumerate(self.pages):
            if p.id == page.id:
                self.pages[i] = page
                return
        self.pages.append(page)

    def _cached(self, page_id: str) -> Optional[PageConfig]:
        return next((p for p in self.pages if p.id == page_id), None)

    @staticmethod
    def _clean_name(name: str) -> str:
        clean = (name or "").strip()
        if not clean:
            raise ValidationError("Page name is required", [{"loc": ["name"], "msg": "must not be blank"}])
        return clean

    def create_page(self, name: str) -> PageConfig:
        clean = self._clean_name(name)
        try:
            page = self.store.create(clean, [])
        except BuilderError:
            self._notify("error", "Error", "Failed to create page")
            raise
        self._cache(page)
        self.load_page(page)
        self._notify("success", "Page created!", f"{page.name} has been created")
        return page

    def rename_page(self, page_id: str, name: str) -> PageConfig:
        clean = self._clean_name(name)
        is_current = page_id == self.page_id
        previous_title = self.title
        if is_current:
            self.title = clean
            components = self.components
        else:
            cached = self._cached(page_id)
            components = cached.components if cached else self.store.get(page_id).components
        try:
            page = self.store.update(page_id, name=clean, components=components)
        except BuilderError:
            if is_current:
                self.title = previous_title
            self._notify("error", "Error", "Failed to rename page")
            raise
        self._cache(page)
        self._notify("success", "Page renamed!")
        return page

    def delete_page(self, page_id: str) -> None:
        if not self.can_delete_page:
            log.info("Suppression refusée : %s est la dernière page", page_id)
            self._notify("error", "Error", "Cannot delete the last page")
            raise ValidationError("Cannot delete the last page", [{"loc": ["page_id"], "msg": "last page"}])
        try:
            self.store.delete(page_id)
        except BuilderError:
            self._notify("error", "Error", "Failed to delete page")
            raise
        self.pages = [p for p in self.pages if p.id != page_id]
        if page_id == self.page_id:
            if self.pages:
                self.load_page(self.pages[0])
            else:
                self._reset()
        self._notify("success", "Page deleted!")

    def switch_page(self, target_id: str) -> None:
        """Sauve la page courante (même vide) puis charge la cible ; abandon si le save échoue."""
        if self.loaded:
            self.save()
        target = self.store.get(target_id)
        self._cache(target)
        self.load_page(target)

    # ── Composants ──────────────────────────────────────────────────────────

    def add_component(self, component_type: str) -> PageComponent:
        if component_type not in COMPONENT_TYPES:
            raise ValidationError(f"Unknown component type: {component_type}",
                                  [{"loc": ["type"], "msg": "unknown component type"}])
        if not self.loaded:
            self.new_page()
        comp = create_component(component_type, order=len(self.components))
        self.components.append(comp)
        self.selected_id = comp.id
        return comp

    def select_component(self, component=None) -> None:
        """Accepte un composant, un id, ou None pour désélectionner."""
        if component is None:
            self.selected_id = None
            return
        cid = component.id if isinstance(component, PageComponent) else component
        self._index(cid)
        self.selected_id = cid

    def update_selected(self, **updates) -> Optional[PageComponent]:
        """
        Fusionne `updates` dans le composant sélectionné (no-op sans sélection).
        `style` est fusionné clé par clé dans le style existant ; id et type sont figés.
        """
        comp = self.selected
        if comp is None:
            return None
        frozen = [k for k in ("id", "type") if k in updates and updates[k] != getattr(comp, k)]
        if frozen:
            raise ValidationError("Component id and type are immutable",
                                  [{"loc": [k], "msg": "immutable"} for k in frozen])
        updates = {k: v for k, v in updates.items() if k not in ("id", "type")}
        unknown = set(updates) - _EDITABLE_FIELDS
        if unknown:
            raise ValidationError("Unknown component fields",
                                  [{"loc": [k], "msg": "unknown field"} for k in sorted(unknown)])
        style_updates = updates.pop("style", None)
        if isinstance(style_updates, ComponentStyle):
            style_updates = style_updates.model_dump(exclude_none=True)
        try:
            style = comp.style.merged(style_updates) if style_updates else comp.style
            data = comp.model_dump(exclude={"style"})
            data.update(updates)
            updated = PageComponent(**data, style=style)
        except pydantic.ValidationError as e:
            raise ValidationError.from_pydantic(e) from e
        self.components[self._index(comp.id)] = updated
        return updated

    def delete_component(self, component_id: str) -> None:
        """Retire le composant sans renuméroter les autres ; vide la sélection s'il était sélectionné."""
        del self.components[self._index(component_id)]
        if self.selected_id == component_id:
            self.selected_id = None

    # ── Persistance ─────────────────────────────────────────────────────────

    def save(self) -> PageConfig:
        with self._save_lock:
            page_id, name = self.page_id, self.title
            components = [c.model_copy(deep=True) for c in self.components]
            try:
                if page_id:
                    page = self.store.update(page_id, name=name, components=components)
                else:
                    page = self.store.create(name, components)
            except BuilderError as e:
                log.error("Échec save page %s : %s", page_id or "(nouvelle)", e.detail or type(e).__name__)
                self._notify("error", "Error", "Failed to save page configuration")
                raise
            self.page_id = page.id
            self._cache(page)
            self._notify("success", "Saved!", "Your page configuration has been saved")
            return page

    # ── Rendu ───────────────────────────────────────────────────────────────

    def render_canvas(self, links: Optional[CanvasLinks] = None) -> str:
        return render_canvas(self.components, self.selected_id, links)

    def export(self) -> str:
        return export_page(self.components)
