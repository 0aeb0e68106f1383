# watir/elements/iframe.py
from __future__ import annotations

from typing import Any

from selenium.common.exceptions import NoSuchFrameException, StaleElementReferenceException
from selenium.webdriver.common.by import By

from watir.elements.element import attribute_property
from watir.elements.html_elements import HTMLElement
from watir.exceptions import UnknownFrameError
from watir.utils.logger import get_logger

log = get_logger(__name__)


class IFrame(HTMLElement):
    """
    An <iframe> that is also a scope: elements located under it are searched
    inside the frame document. Every child lookup re-enters the frame from the
    top, so nested frames resolve outermost first.
    """

    DEFAULT_SELECTOR = {"tag_name": "iframe"}
    unknown_error = UnknownFrameError

    name = attribute_property("name")
    src = attribute_property("src")

    def switch_to(self) -> "IFrame":
        """Point the driver at this frame's document."""
        if self.located:
            self.ensure_context()
        else:
            self.locate()
        try:
            self._switch()
        except (StaleElementReferenceException, NoSuchFrameException) as e:
            if not self._relocatable():
                self.reset()
                raise UnknownFrameError(f"unable to locate frame {self!r}") from e
            log.debug(f"frame went stale, relocating {self!r}")
            self.reset()
            self.locate()
            try:
                self._switch()
            except (StaleElementReferenceException, NoSuchFrameException) as err:
                self.reset()
                raise UnknownFrameError(f"unable to locate frame {self!r}") from err
        return self

    def _switch(self) -> None:
        self.driver.switch_to.frame(self._native)
        self.browser.default_context = False
        log.debug(f"switched into {self!r}")

    # ---------- Scope ----------

    def ensure_child_context(self) -> None:
        self.switch_to()

    def search_context(self) -> Any:
        return self.driver

    # ---------- Frame-local reads ----------

    @property
    def html(self) -> str:
        self.switch_to()
        return self.driver.execute_script("return document.documentElement.outerHTML")

    @property
    def text(self) -> str:
        self.switch_to()
        return self.driver.find_element(By.TAG_NAME, "body").text

    def execute_script(self, script: str, *args: Any) -> Any:
        self.switch_to()
        return self.browser.run_script(script, *args, scope=self)


class Frame(IFrame):
    DEFAULT_SELECTOR = {"tag_name": "frame"}
