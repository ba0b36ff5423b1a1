# ui/view_component.py
from __future__ import annotations
from typing import Any, Optional

from app.controller.controller import Controller
from app.controller.errors import ConfigurationError


class ViewComponent:
    """
    Base for view pieces rendered by a controller's render().
    The controller arrives as the `controller` prop; the rendered element is kept via save_ref_to_dom_element().
    """
    def __init__(self, **props: Any):
        self.props = props
        self._element: Optional[Any] = None
        self.init()

    def init(self) -> None:
        pass

    def get_dom_element(self) -> Optional[Any]:
        return self._element

    def save_ref_to_dom_element(self, element: Any) -> None:
        self._element = element

    def get_controller(self) -> Controller:
        controller = self.props.get("controller")
        if isinstance(controller, Controller):
            return controller
        raise ConfigurationError(f"{type(self).__name__}: No controller passed to this component!")
