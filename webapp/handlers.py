from typing import Any, Iterable, MutableMapping, Optional
from dataclasses import replace
import sys

from body_language_analyst import state as app
from body_language_analyst.config import load_config
from body_language_analyst.image_io import ingest_uploads
from body_language_analyst.models import Tag
from body_language_analyst.providers import get_provider
from body_language_analyst.services.analyzer import AnalyzerService
from body_language_analyst.tagging import TaggingSession
from body_language_analyst.tags import find_image

STATE_KEY = "app_state"
TAGGING_KEY = "tagging"
CLICKS_KEY = "last_click"


def get_state(session: MutableMapping) -> app.AppState:
    if STATE_KEY not in session:
        session[STATE_KEY] = app.AppState()
    return session[STATE_KEY]


def set_state(session: MutableMapping, new_state: app.AppState) -> app.AppState:
    session[STATE_KEY] = new_state
    return new_state


def tagging_session(session: MutableMapping, image_id: str) -> TaggingSession:
    sessions = session.setdefault(TAGGING_KEY, {})
    if image_id not in sessions:
        sessions[image_id] = TaggingSession(image_id)
    return sessions[image_id]


def handle_upload(session: MutableMapping, files: Iterable[Any], debug: bool = False) -> Optional[str]:
    """Ingest a batch of uploads; returns the aggregate error, if any."""
    current = get_state(session)
    result = ingest_uploads(files, existing=current.images, debug=debug)
    set_state(session, app.images_uploaded(current, result))
    return result.error_message


def handle_remove(session: MutableMapping, image_id: str) -> None:
    set_state(session, app.image_removed(get_state(session), image_id))
    session.get(TAGGING_KEY, {}).pop(image_id, None)
    session.get(CLICKS_KEY, {}).pop(image_id, None)


def handle_click(session: MutableMapping, image_id: str, value: Optional[dict]) -> bool:
    """Feed a click from the image widget into the tagging session.

    The widget reports its last click on every rerun, so a value identical to
    the previous one is ignored. Returns True when a new pending tag was set.
    """
    if not value or find_image(get_state(session).images, image_id) is None:
        return False
    clicks = session.setdefault(CLICKS_KEY, {})
    if clicks.get(image_id) == value:
        return False
    clicks[image_id] = dict(value)
    tagging_session(session, image_id).click(value["x"], value["y"])
    return True


def handle_tag_name(session: MutableMapping, image_id: str, text: str) -> None:
    tagging_session(session, image_id).type_name(text)


def handle_tag_submit(session: MutableMapping, image_id: str) -> Optional[Tag]:
    tag = tagging_session(session, image_id).submit()
    if tag is not None:
        set_state(session, app.tag_added(get_state(session), image_id, tag))
    return tag


def handle_tag_cancel(session: MutableMapping, image_id: str) -> None:
    tagging_session(session, image_id).cancel()


def handle_context(session: MutableMapping, text: str) -> None:
    current = get_state(session)
    if (text or "") != current.context:
        set_state(session, app.context_changed(current, text))


def handle_analyze(session: MutableMapping, cfg: Any = None, service: Optional[AnalyzerService] = None) -> app.AppState:
    current = get_state(session)
    if cfg is None:
        cfg = load_config(require_api_key=False)
    if service is None:
        try:
            service = AnalyzerService(get_provider(cfg))
        except ValueError as e:
            print(f"ERROR: {e}", file=sys.stderr)
            return set_state(session, replace(current, error=str(e)))
    return set_state(session, app.run_analysis(current, cfg, service))
