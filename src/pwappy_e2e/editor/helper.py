"""Stateful interaction helper for the Pwappy editor page.

One EditorHelper is created per test and bound to the editor tab. Every
state-changing action waits for its observable effect before returning;
a failed wait propagates as the assertion error from Playwright's expect.
"""

from __future__ import annotations

import asyncio
import logging
import re
from typing import TYPE_CHECKING

from playwright.async_api import expect

from pwappy_e2e.constants import (
    ADD_BUTTON_LABEL,
    ADD_PAGE_LABEL,
    ADD_SCRIPT_TITLE,
    ADD_TO_ELEMENT_LABEL,
    ADD_TO_TAG_LABEL,
    ALERT_COMPONENT,
    ATTRIBUTE_EDIT_ICON,
    ATTRIBUTE_ITEM,
    ATTRIBUTE_LIST,
    ATTRIBUTE_NAME_LABEL,
    ATTRIBUTE_TEMPLATE_LABEL,
    BOTTOM_MENU,
    BOTTOM_MENU_BUTTON,
    CHILD_NODE_TEMPLATE,
    CLOSE_BUTTON_LABEL,
    COMPONENT_INSERT_TIMEOUT_MS,
    CONTENT_LABEL,
    CONTEXT_MENU,
    DELETE_BUTTON_LABEL,
    DOM_NODE,
    DOM_TREE,
    DRAG_SETTLE_MS,
    DRAG_STEPS,
    EDIT_ATTRIBUTES_TITLE,
    EDIT_EVENTS_BUTTON,
    EDIT_SCRIPT_TITLE,
    EDITOR_LOADING_OVERLAY,
    EDITOR_PROCESSING_TEXT,
    EDITOR_ROW,
    EVENT_ADD_SCRIPT_BUTTON,
    EVENT_COMMENT_INPUT,
    EVENT_CONTAINER,
    EVENT_EDIT_MENU,
    EVENT_LIST_POPUP,
    EVENT_NAME_INPUT,
    EVENT_ROW_TEMPLATE,
    EVENT_SCRIPT_ADD_MENU,
    EVENT_TARGET_INPUT,
    HAMBURGER_BUTTON,
    HTML_TAG_INSERT_TIMEOUT_MS,
    HTML_TAG_PROMPT,
    HTML_TAG_TOOL,
    LEFT_MOVING_HANDLE,
    LOADING_OVERLAY_TIMEOUT_MS,
    MESSAGE_BOX,
    MONACO_EDITOR,
    MOVING_HANDLE_POLL_MS,
    MOVING_HANDLE_TIMEOUT_MS,
    NODE_BY_ATTRIBUTE_TEMPLATE,
    NODE_ID_ATTRIBUTE,
    NODE_SELECTED_CLASS,
    NO_HIGHLIGHT_BACKGROUND,
    OPTIONAL_DIALOG_TIMEOUT_MS,
    PAGE_NODES,
    PLATFORM_EDIT_MENU,
    PLATFORM_MENU_TOGGLE,
    PLATFORM_SWITCHER,
    PREVIEW_FRAME,
    PROPERTY_CONTAINER,
    PROPERTY_INPUT_TEMPLATE,
    QR_CODE,
    RIGHT_MOVING_HANDLE,
    ROW_COMMENT,
    RUN_MODE_LABEL,
    SAVE_ALERT_TIMEOUT_MS,
    SAVE_BUTTON_LABEL,
    SAVE_ERROR_MARKERS,
    SAVE_ICON_DIRTY_CLASS,
    SAVE_SCRIPT_TITLE,
    SCRIPT_ADD_MENU,
    SCRIPT_CONTAINER,
    SCRIPT_EDITOR_CONTAINER,
    SCRIPT_LIST_CONTAINER,
    SCRIPT_NAME_INPUT,
    SCRIPT_ROW_ITEM,
    SCRIPT_ROW_LEFT,
    SCRIPT_SAVE_FAB,
    SCRIPT_TYPE_RADIO_TEMPLATE,
    SERVICE_WORKER_CONTAINER,
    SNAPSHOT_DISCARD_CONFIRM_LABEL,
    SNAPSHOT_DISCARD_LABEL,
    SNAPSHOT_DISCARD_TEXT,
    SNAPSHOT_RESTORE_TEXT,
    SNAPSHOT_SETTLE_SECONDS,
    TAB,
    TAB_EVENTS,
    TAB_SERVICE_WORKER,
    TEMPLATE_CONTAINER,
    TEMPLATE_SELECT,
    TEMPLATE_TITLE_BAR,
    TOOL_BOX_ITEM,
    TOP_CONTAINER,
    TOP_TEMPLATE_ITEM,
    TOP_TEMPLATE_ITEM_TEMPLATE,
    TOP_TEMPLATE_LIST,
)
from pwappy_e2e.editor.alerts import LocatorScope, verify_and_close_alert
from pwappy_e2e.editor.monaco import get_editor_content, set_editor_content
from pwappy_e2e.editor.preview import assert_contains_normalized, collect_preview_scripts
from pwappy_e2e.models import (
    AttributeScope,
    EditorInputResult,
    ElementNotRenderedError,
    MovingHandle,
    NodeIdMissingError,
    ScriptSaveError,
    ScriptType,
)
from pwappy_e2e.utils.waits import is_visible_within

if TYPE_CHECKING:
    from playwright.async_api import Dialog, FloatRect, FrameLocator, Locator, Page

logger = logging.getLogger(__name__)

_DIRTY_SAVE_ICON = re.compile(SAVE_ICON_DIRTY_CLASS)
_SELECTED_NODE = re.compile(NODE_SELECTED_CLASS)
_ANY_VALUE = re.compile(".*")

_ROW_BACKGROUND_JS = """
(el) => {
    const root = el.getRootNode();
    if (!(root instanceof ShadowRoot)) return null;
    const row = root.host.closest(".editor-row");
    return row ? window.getComputedStyle(row).backgroundColor : null;
}
"""


def _center(box: FloatRect) -> tuple[float, float]:
    return box["x"] + box["width"] / 2, box["y"] + box["height"] / 2


class EditorHelper:
    """Drives the editor page: DOM tree, script panel, preview and save.

    Attributes:
        page: Editor page (opened from the dashboard's version list)
        is_mobile: Whether side panels are hidden behind moving handles
    """

    def __init__(self, page: Page, is_mobile: bool = False) -> None:
        """Bind the helper to an editor page.

        Args:
            page: Editor page
            is_mobile: True when the run emulates a mobile viewport
        """
        self.page = page
        self.is_mobile = is_mobile

    # ------------------------------------------------------------------
    # Locators
    # ------------------------------------------------------------------

    @property
    def script_container(self) -> Locator:
        return self.page.locator(SCRIPT_CONTAINER)

    def get_dom_tree(self) -> Locator:
        return self.page.locator(DOM_TREE)

    def get_property_container(self) -> Locator:
        return self.page.locator(PROPERTY_CONTAINER)

    def get_preview_frame(self) -> FrameLocator:
        """Return the FrameLocator of the preview iframe."""
        return self.page.frame_locator(PREVIEW_FRAME)

    def get_preview_element(self, selector: str) -> Locator:
        return self.get_preview_frame().locator(selector)

    def get_property_input(self, name: str) -> Locator:
        """Return the property-panel widget for an attribute or custom tag.

        The host element can match both selectors, so only the first
        match is returned.

        Args:
            name: Attribute name or custom tag name (e.g., "page", "style-flex-item")

        Returns:
            Locator of the widget
        """
        selector = PROPERTY_INPUT_TEMPLATE.format(name=name)
        return self.get_property_container().locator(selector).first

    def get_content_area(self, page_node: Locator) -> Locator:
        """Return the content-area child of a page node in the DOM tree."""
        return page_node.locator(DOM_NODE).filter(has_text=CONTENT_LABEL)

    def _event_row(self, scope: Locator, event_name: str) -> Locator:
        return scope.locator(EVENT_ROW_TEMPLATE.format(event_name=event_name))

    async def _wait_for_processing(self) -> None:
        await (
            self.page.locator(EDITOR_LOADING_OVERLAY)
            .get_by_text(EDITOR_PROCESSING_TEXT)
            .wait_for(state="hidden", timeout=LOADING_OVERLAY_TIMEOUT_MS)
        )

    # ------------------------------------------------------------------
    # Startup
    # ------------------------------------------------------------------

    async def handle_snapshot_restore_dialog(self) -> None:
        """Discard an offered snapshot restore after the editor loads.

        An editor closed abnormally offers to restore a snapshot. The
        offer is discarded through two message boxes; the application
        then calls alert(), which a temporary dialog handler accepts.
        The handler is removed whether or not the prompt appeared.
        """

        async def _accept(dialog: Dialog) -> None:
            logger.debug("Auto-accepting dialog: %s", dialog.message)
            await dialog.accept()

        self.page.on("dialog", _accept)
        try:
            await expect(self.page.locator(EDITOR_LOADING_OVERLAY)).to_be_hidden(timeout=LOADING_OVERLAY_TIMEOUT_MS)

            restore_dialog = self.page.locator(MESSAGE_BOX).filter(has_text=SNAPSHOT_RESTORE_TEXT)
            if not await is_visible_within(restore_dialog, OPTIONAL_DIALOG_TIMEOUT_MS):
                logger.debug("No snapshot restore prompt")
                return

            await restore_dialog.get_by_role("button", name=SNAPSHOT_DISCARD_LABEL).click()

            confirm_dialog = self.page.locator(MESSAGE_BOX).filter(has_text=SNAPSHOT_DISCARD_TEXT)
            await expect(confirm_dialog).to_be_visible(timeout=OPTIONAL_DIALOG_TIMEOUT_MS)
            await confirm_dialog.get_by_role("button", name=SNAPSHOT_DISCARD_CONFIRM_LABEL).click()

            await expect(restore_dialog).to_be_hidden()
            await expect(confirm_dialog).to_be_hidden()
            await asyncio.sleep(SNAPSHOT_SETTLE_SECONDS)
            logger.info("Discarded snapshot restore offer")
        finally:
            self.page.remove_listener("dialog", _accept)

    # ------------------------------------------------------------------
    # Mobile side panels
    # ------------------------------------------------------------------

    async def open_moving_handle(self, side: MovingHandle | str) -> None:
        """Show a side panel by tapping its moving handle (mobile only).

        The handle toggles on a double tap; taps are repeated until the
        panel is visible or MOVING_HANDLE_TIMEOUT_MS elapses.

        Args:
            side: "left" (template panel) or "right" (script panel)
        """
        if not self.is_mobile:
            return

        side = MovingHandle(side)
        left_handle = self.page.locator(LEFT_MOVING_HANDLE)
        right_handle = self.page.locator(RIGHT_MOVING_HANDLE)
        await expect(left_handle).to_be_visible()
        await expect(right_handle).to_be_visible()

        if side is MovingHandle.LEFT:
            handle, target = left_handle, self.page.locator(TEMPLATE_CONTAINER)
        else:
            handle, target = right_handle, self.script_container

        if await target.is_visible():
            return

        loop = asyncio.get_running_loop()
        deadline = loop.time() + MOVING_HANDLE_TIMEOUT_MS / 1000
        while True:
            await handle.tap()
            await handle.tap()
            try:
                await expect(target).to_be_visible(timeout=MOVING_HANDLE_POLL_MS)
                logger.debug("Opened %s panel", side.value)
                return
            except AssertionError:
                if loop.time() >= deadline:
                    raise

    async def close_moving_handle(self) -> None:
        """Hide whichever side panels are open (mobile only)."""
        if not self.is_mobile:
            return

        if await self.script_container.is_visible():
            handle = self.page.locator(RIGHT_MOVING_HANDLE)
            await handle.tap()
            await handle.tap()

        if await self.page.locator(TEMPLATE_CONTAINER).is_visible():
            handle = self.page.locator(LEFT_MOVING_HANDLE)
            await handle.tap()
            await handle.tap()

    async def switch_tab_in_container(self, container: Locator, tab_name: str) -> None:
        await container.locator(TAB).filter(has_text=tab_name).click()

    # ------------------------------------------------------------------
    # DOM tree
    # ------------------------------------------------------------------

    async def add_page(self) -> Locator:
        """Add a page through the template panel's context menu.

        Returns:
            Locator of the newly added (last) page node
        """
        await self._wait_for_processing()
        await self.open_moving_handle(MovingHandle.LEFT)

        hamburger = self.page.locator(HAMBURGER_BUTTON)
        await expect(hamburger).to_be_visible()
        await hamburger.click()

        context_menu = self.page.locator(CONTEXT_MENU)
        await expect(context_menu).to_be_visible()
        await context_menu.get_by_text(ADD_PAGE_LABEL).click()

        new_page_node = self.page.locator(PAGE_NODES).last
        await expect(new_page_node).to_be_visible()
        logger.debug("Added page node")
        return new_page_node

    async def add_component(self, component_name: str, target: str | Locator) -> Locator:
        """Drag a toolbox component onto a DOM-tree node.

        Args:
            component_name: Toolbox label, also the resulting node type (e.g., "ons-button")
            target: Drop target as a selector string or a Locator

        Returns:
            Locator of the first direct child node of that type under target
        """
        await self.open_moving_handle(MovingHandle.LEFT)
        target_locator = self.page.locator(target) if isinstance(target, str) else target

        tool = self.page.locator(TOOL_BOX_ITEM).filter(has_text=component_name)
        await tool.drag_to(target_locator, target_position={"x": 10, "y": 10})

        new_node = target_locator.locator(CHILD_NODE_TEMPLATE.format(node_type=component_name)).first
        await expect(new_node).to_be_visible(timeout=COMPONENT_INSERT_TIMEOUT_MS)
        logger.debug("Added component: %s", component_name)
        return new_node

    async def add_component_as_html_tag(self, tag_name: str, target_selector: str) -> Locator:
        """Drop the "HTML Tag" tool and answer the tag-name prompt.

        Args:
            tag_name: Tag to create (e.g., "flex-container")
            target_selector: Drop target selector

        Returns:
            Locator of the new tag node
        """
        await self.open_moving_handle(MovingHandle.LEFT)

        async def _answer_prompt(dialog: Dialog) -> None:
            if dialog.message != HTML_TAG_PROMPT:
                logger.warning("Unexpected dialog while adding <%s>: %s", tag_name, dialog.message)
                await dialog.dismiss()
                return
            await dialog.accept(tag_name)

        self.page.once("dialog", _answer_prompt)

        target_locator = self.page.locator(target_selector)
        await self.page.locator(TOOL_BOX_ITEM).filter(has_text=HTML_TAG_TOOL).drag_to(target_locator)

        new_node = target_locator.locator(CHILD_NODE_TEMPLATE.format(node_type=tag_name))
        await expect(new_node).to_be_visible(timeout=HTML_TAG_INSERT_TIMEOUT_MS)
        return new_node

    async def select_node_in_dom_tree(self, node: Locator) -> None:
        await self.open_moving_handle(MovingHandle.LEFT)
        await node.click(position={"x": 0, "y": 10})
        await expect(node).to_have_class(_SELECTED_NODE)

    async def select_node_by_attribute(self, attribute: str, value: str) -> Locator:
        """Select the DOM-tree node whose attribute equals value.

        Args:
            attribute: e.g., "data-node-id" or "data-node-type"
            value: Attribute value

        Returns:
            Locator of the selected node
        """
        node = self.get_dom_tree().locator(NODE_BY_ATTRIBUTE_TEMPLATE.format(attribute=attribute, value=value))
        await self.select_node_in_dom_tree(node)
        return node

    async def get_node_id(self, node: Locator) -> str:
        """Read a DOM-tree node's identifier.

        Raises:
            NodeIdMissingError: If the node has no data-node-id
        """
        node_id = await node.get_attribute(NODE_ID_ATTRIBUTE)
        if not node_id:
            raise NodeIdMissingError(
                f"DOM-tree node has no {NODE_ID_ATTRIBUTE} attribute",
                details={"attribute": NODE_ID_ATTRIBUTE},
            )
        return node_id

    async def switch_top_level_template(self, template_id: str) -> None:
        """Switch the DOM tree to another top-level template.

        Args:
            template_id: Node id of the application or a page
        """
        await self.open_moving_handle(MovingHandle.LEFT)
        top_container = self.page.locator(TOP_CONTAINER)
        await top_container.click()

        template_list = top_container.locator(TOP_TEMPLATE_LIST)
        await expect(template_list).to_be_visible()

        item = template_list.locator(TOP_TEMPLATE_ITEM_TEMPLATE.format(template_id=template_id))
        await expect(item).to_be_visible()
        await expect(item).to_be_enabled()
        await item.click()
        await expect(template_list).to_be_hidden()
        logger.debug("Switched top-level template to %s", template_id)

    async def expect_page_in_template_list(self, page_name: str) -> None:
        """Assert that the top-level template list offers page_name, then close the list."""
        await self.open_moving_handle(MovingHandle.LEFT)
        template_container = self.page.locator(TEMPLATE_CONTAINER)
        await template_container.locator(TEMPLATE_SELECT).click()

        template_list = template_container.locator(TOP_TEMPLATE_LIST)
        await expect(template_list).to_be_visible()
        await expect(template_list.locator(TOP_TEMPLATE_ITEM).filter(has_text=page_name)).to_be_visible()

        await template_container.locator(TEMPLATE_TITLE_BAR).click()
        await expect(template_list).to_be_hidden()

    async def setup_page_with_button(self) -> tuple[Locator, Locator]:
        """Add a page and drop one ons-button into its content area.

        Returns:
            (page node, button node)
        """
        page_node = await self.add_page()
        button_node = await self.add_component("ons-button", self.get_content_area(page_node))
        return page_node, button_node

    async def drag_and_drop_manually(self, source: Locator, target: Locator, steps: int = DRAG_STEPS) -> None:
        """Drag source onto the centre of target with a stepped mouse move.

        Locator.drag_to moves in one jump, which is too fast for the DOM
        tree's reordering handlers to see dragover. More steps mean a
        slower drag.

        Args:
            source: Element to drag
            target: Element to drop onto
            steps: Number of intermediate mouse moves

        Raises:
            ElementNotRenderedError: If either element has no bounding box
        """
        source_box = await source.bounding_box()
        target_box = await target.bounding_box()
        if source_box is None or target_box is None:
            raise ElementNotRenderedError(
                "Cannot drag: element has no bounding box",
                details={"source_rendered": source_box is not None, "target_rendered": target_box is not None},
            )

        mouse = self.page.mouse
        await mouse.move(*_center(source_box))
        await mouse.down()
        await mouse.move(*_center(target_box), steps=steps)
        await mouse.up()
        await self.page.wait_for_timeout(DRAG_SETTLE_MS)

    # ------------------------------------------------------------------
    # Property panel
    # ------------------------------------------------------------------

    async def open_attribute_editor(self) -> None:
        await self.open_moving_handle(MovingHandle.RIGHT)
        await self.get_property_container().get_by_title(EDIT_ATTRIBUTES_TITLE).click()
        await expect(self.page.locator(ATTRIBUTE_LIST)).to_be_visible()

    async def add_attribute_definition(self, name: str, template: str, scope: AttributeScope | str) -> None:
        """Define a new attribute in the open attribute editor.

        Args:
            name: Attribute name
            template: Input template (e.g., "input[text]", "style-flex")
            scope: "element" adds it to the selected node only, "tag" to every node of its tag
        """
        scope = AttributeScope(scope)
        container = self.get_property_container()
        scope_label = ADD_TO_ELEMENT_LABEL if scope is AttributeScope.ELEMENT else ADD_TO_TAG_LABEL
        await container.get_by_role("button", name=scope_label).click()

        await container.get_by_role("combobox", name=ATTRIBUTE_NAME_LABEL).fill(name)
        await container.get_by_role("combobox", name=ATTRIBUTE_TEMPLATE_LABEL).fill(template)
        await container.get_by_role("button", name=ADD_BUTTON_LABEL).click()

        await expect(container.locator(ATTRIBUTE_LIST)).to_be_hidden()
        await expect(container.locator(EDITOR_ROW).filter(has_text=name)).to_be_visible()
        logger.debug("Added attribute %s (%s) to %s", name, template, scope.value)

    async def delete_attribute_definition(self, name: str) -> None:
        """Delete an attribute definition from the open attribute editor.

        The editor asks for confirmation with a native confirm(), which a
        one-shot handler accepts.
        """
        container = self.get_property_container()
        attribute_row = container.locator(ATTRIBUTE_LIST).locator(ATTRIBUTE_ITEM).filter(has_text=name)
        await attribute_row.locator(ATTRIBUTE_EDIT_ICON).click()

        async def _confirm(dialog: Dialog) -> None:
            await dialog.accept()

        self.page.once("dialog", _confirm)
        await container.get_by_role("button", name=DELETE_BUTTON_LABEL).click()
        await expect(attribute_row).to_be_hidden()
        logger.debug("Deleted attribute %s", name)

    async def expect_property_highlight(self, property_input: Locator, expected_color: str | None) -> None:
        """Assert the background colour of the editor row holding a property widget.

        The widget lives in a shadow root; its host's enclosing
        .editor-row carries the highlight.

        Args:
            property_input: Widget returned by get_property_input()
            expected_color: Computed colour (e.g., "rgba(0, 112, 255, 0.11)"),
                or None for an unhighlighted row

        Raises:
            AssertionError: If the row's background differs
        """
        expected = expected_color or NO_HIGHLIGHT_BACKGROUND
        background = await property_input.evaluate(_ROW_BACKGROUND_JS)
        if background != expected:
            raise AssertionError(f"Property row background is {background!r}, expected {expected!r}")

    # ------------------------------------------------------------------
    # Event scripts
    # ------------------------------------------------------------------

    async def add_script_to_event(self, event_name: str, script_name: str) -> None:
        """Create a script bound to an event of the selected node.

        Args:
            event_name: Event label in the event tab (e.g., "DOMContentLoaded", "click")
            script_name: Name of the new script
        """
        await expect(self.script_container).to_be_visible()

        event_row = self._event_row(self.script_container, event_name)
        await expect(event_row).to_be_visible()
        await event_row.get_by_title(ADD_SCRIPT_TITLE).click()

        add_menu = self.page.locator(EVENT_SCRIPT_ADD_MENU)
        await expect(add_menu).to_be_visible()
        await add_menu.locator(SCRIPT_NAME_INPUT).fill(script_name)
        await expect(add_menu).to_be_enabled()
        await add_menu.locator(EVENT_ADD_SCRIPT_BUTTON).click()
        await expect(add_menu).to_be_hidden()

        await expect(event_row.get_by_text(script_name)).to_be_visible()
        logger.debug("Added script %s to event %s", script_name, event_name)

    async def add_script_to_node_event(self, node: Locator, event_name: str, script_name: str) -> None:
        await self.open_moving_handle(MovingHandle.LEFT)
        await self.select_node_in_dom_tree(node)
        await self.open_moving_handle(MovingHandle.RIGHT)
        await self.switch_tab_in_container(self.script_container, TAB_EVENTS)
        await self.add_script_to_event(event_name, script_name)

    async def edit_script(self, event_name: str, script_name: str, script_content: str) -> None:
        """Replace the source of an event script and save it.

        Args:
            event_name: Event the script is bound to
            script_name: Script to edit
            script_content: Complete new source text

        Raises:
            ScriptSaveError: If the save alert reports an error
        """
        await self.open_moving_handle(MovingHandle.RIGHT)
        await expect(self.script_container).to_be_visible()
        event_container = self.script_container.locator(EVENT_CONTAINER)
        await expect(event_container).to_be_visible()

        event_row = self._event_row(event_container, event_name)
        await expect(event_row).to_be_visible()
        script_row = event_row.locator(SCRIPT_ROW_ITEM).filter(has_text=script_name)
        await expect(script_row).to_be_visible()
        await script_row.get_by_title(EDIT_SCRIPT_TITLE).click()

        editor = self.script_container.locator(MONACO_EDITOR)
        await expect(editor).to_be_visible()
        await set_editor_content(self.page, editor, script_content)

        save_button = self.script_container.get_by_title(SAVE_SCRIPT_TITLE)
        save_icon = save_button.locator("i")
        await expect(save_icon).to_have_class(_DIRTY_SAVE_ICON)
        await save_button.click()

        await self._dismiss_save_alert(script_name)
        await expect(save_icon).not_to_have_class(_DIRTY_SAVE_ICON)
        logger.debug("Saved script %s for event %s", script_name, event_name)

    async def _dismiss_save_alert(self, script_name: str) -> None:
        alert = self.page.locator(ALERT_COMPONENT)
        if not await is_visible_within(alert, SAVE_ALERT_TIMEOUT_MS):
            return

        message = await alert.text_content() or ""
        if any(marker in message for marker in SAVE_ERROR_MARKERS):
            raise ScriptSaveError(
                f"Script save failed: {message.strip()}",
                details={"script": script_name, "message": message.strip()},
            )
        await alert.get_by_role("button", name=CLOSE_BUTTON_LABEL).click()
        await expect(alert).to_be_hidden()

    async def dismiss_editor_alert(self, expected_text: str) -> None:
        """Verify the editor's alert-component shows expected_text and close it."""
        alert = self.page.locator(ALERT_COMPONENT)
        await expect(alert).to_be_visible()
        await expect(alert).to_contain_text(expected_text)
        await alert.get_by_role("button", name=CLOSE_BUTTON_LABEL).click()
        await expect(alert).to_be_hidden()

    async def add_custom_event_definition(self, listener_target: str, event_name: str, comment: str) -> None:
        """Define a custom event on the event tab.

        Args:
            listener_target: Where the listener is registered (e.g., "element", "document")
            event_name: Event name (e.g., "test-event")
            comment: Comment shown next to the event row
        """
        await self._add_event_definition(
            TAB_EVENTS, EVENT_CONTAINER, event_name, comment, listener_target=listener_target
        )

    async def add_custom_service_worker_event_definition(self, event_name: str, comment: str) -> None:
        """Define a custom event on the service-worker tab (no listener target)."""
        await self._add_event_definition(TAB_SERVICE_WORKER, SERVICE_WORKER_CONTAINER, event_name, comment)

    async def _add_event_definition(
        self,
        tab_name: str,
        container_selector: str,
        event_name: str,
        comment: str,
        *,
        listener_target: str | None = None,
    ) -> None:
        await self.open_moving_handle(MovingHandle.RIGHT)
        await expect(self.script_container).to_be_visible()
        await self.switch_tab_in_container(self.script_container, tab_name)
        container = self.script_container.locator(container_selector)
        await expect(container).to_be_visible()

        await container.locator(EDIT_EVENTS_BUTTON).click()
        event_list = container.locator(EVENT_LIST_POPUP)
        await expect(event_list).to_be_visible()
        await event_list.get_by_role("button", name=ADD_BUTTON_LABEL).click()

        edit_menu = container.locator(EVENT_EDIT_MENU)
        await expect(edit_menu).to_be_visible()
        if listener_target is not None:
            await edit_menu.locator(EVENT_TARGET_INPUT).fill(listener_target)
        await edit_menu.locator(EVENT_NAME_INPUT).fill(event_name)
        await edit_menu.locator(EVENT_COMMENT_INPUT).fill(comment)
        await edit_menu.get_by_role("button", name=ADD_BUTTON_LABEL).click()

        await expect(edit_menu).to_be_hidden()
        await expect(event_list).to_be_hidden()

        new_row = container.locator(EDITOR_ROW).filter(has_text=event_name)
        await expect(new_row).to_be_visible()
        await expect(new_row.locator(ROW_COMMENT)).to_have_text(comment)
        logger.debug("Defined custom event %s on %s tab", event_name, tab_name)

    # ------------------------------------------------------------------
    # Global scripts
    # ------------------------------------------------------------------

    async def add_new_script(self, script_name: str, script_type: ScriptType | str = ScriptType.FUNCTION) -> None:
        """Create a global script from the script tab.

        Args:
            script_name: Name of the new script
            script_type: "function" or "class"
        """
        script_type = ScriptType(script_type)
        list_container = self.script_container.locator(SCRIPT_LIST_CONTAINER)
        await list_container.get_by_title(ADD_SCRIPT_TITLE).click()

        add_menu = list_container.locator(SCRIPT_ADD_MENU)
        await expect(add_menu).to_be_visible()
        await add_menu.locator(SCRIPT_TYPE_RADIO_TEMPLATE.format(script_type=script_type.value)).check()
        await add_menu.locator(SCRIPT_NAME_INPUT).fill(script_name)
        await add_menu.get_by_role("button", name=ADD_BUTTON_LABEL).click()
        await expect(add_menu).to_be_hidden()
        await expect(self.script_container.locator(SCRIPT_ROW_LEFT).filter(has_text=script_name)).to_be_visible()

    async def _open_global_script_editor(self, script_name: str) -> Locator:
        script_row = self.script_container.locator(EDITOR_ROW).filter(has_text=script_name)
        await script_row.get_by_title(EDIT_SCRIPT_TITLE).click()

        editor_container = self.script_container.locator(SCRIPT_EDITOR_CONTAINER)
        await expect(editor_container).to_be_visible()
        editor = editor_container.locator(MONACO_EDITOR)
        await expect(editor).to_be_visible()
        return editor

    async def open_script_for_editing(self, script_name: str) -> None:
        """Open a listed script in the code editor without changing it."""
        script_row = self.script_container.locator(EDITOR_ROW).filter(has_text=script_name)
        await expect(script_row).to_be_visible()
        await script_row.get_by_title(EDIT_SCRIPT_TITLE).click()
        await expect(self.script_container.locator(MONACO_EDITOR)).to_be_visible()

    async def edit_script_content(self, script_name: str, script_content: str) -> None:
        """Replace a global script's source and press the save button."""
        editor = await self._open_global_script_editor(script_name)
        await set_editor_content(self.page, editor, script_content)
        await self.script_container.locator(SCRIPT_SAVE_FAB).click()

    async def fill_script_content(self, script_name: str, script_content: str) -> EditorInputResult:
        """Replace a global script's source without saving.

        The editor keeps focus, so invalid code stays pending; used to
        check that tab switches and saves are blocked.

        Returns:
            How the text was written and what was read back
        """
        editor = await self._open_global_script_editor(script_name)
        return await set_editor_content(self.page, editor, script_content)

    async def get_editor_content(self) -> str:
        editor = self.script_container.locator(MONACO_EDITOR)
        await expect(editor).to_be_visible()
        return await get_editor_content(self.page, editor)

    # ------------------------------------------------------------------
    # Preview and run mode
    # ------------------------------------------------------------------

    async def verify_script_in_preview(self, expected: str) -> None:
        """Assert that the preview's scripts contain expected, ignoring whitespace layout."""
        actual = await collect_preview_scripts(self.get_preview_frame())
        assert_contains_normalized(actual, expected)

    async def expect_preview_element_css(self, selector: str, css_property: str, value: str | re.Pattern[str]) -> None:
        await expect(self.get_preview_element(selector)).to_have_css(css_property, value)

    async def expect_preview_element_attribute(self, selector: str, attribute_name: str, value: str | None) -> None:
        """Assert an attribute of a preview element.

        Args:
            selector: CSS selector inside the preview frame
            attribute_name: Attribute to check
            value: Expected value, or None to assert the attribute is absent
        """
        element = self.get_preview_element(selector)
        if value is None:
            await expect(element).not_to_have_attribute(attribute_name, _ANY_VALUE)
        else:
            await expect(element).to_have_attribute(attribute_name, value)

    async def switch_to_run_mode_and_verify(self, expected_alert_text: str | None = None) -> None:
        """Switch the preview to run mode.

        Args:
            expected_alert_text: When given, an alert with this text must
                appear in the preview and is dismissed
        """
        switcher = self.page.locator(PLATFORM_SWITCHER)
        toggle = switcher.locator(PLATFORM_MENU_TOGGLE)
        await toggle.click()
        menu = switcher.locator(PLATFORM_EDIT_MENU)
        await expect(menu).to_be_visible()

        await menu.get_by_text(RUN_MODE_LABEL).click()
        await toggle.click()
        await expect(menu).to_be_hidden()
        logger.debug("Switched preview to run mode")

        if expected_alert_text:
            await verify_and_close_alert(self.get_preview_frame(), expected_alert_text)

    async def verify_and_close_alert(self, scope: LocatorScope, expected_text: str) -> None:
        await verify_and_close_alert(scope, expected_text)

    async def save_and_open_test_page(self) -> Page:
        """Save the application and open the real-device test page.

        Returns:
            The test page opened in a new tab of the same context
        """
        menu_button = self.page.locator(BOTTOM_MENU_BUTTON)
        bottom_menu = self.page.locator(BOTTOM_MENU)

        await expect(menu_button).to_be_visible()
        await expect(menu_button).to_be_enabled()
        await menu_button.click()
        await expect(bottom_menu).to_be_visible()

        await bottom_menu.get_by_text(SAVE_BUTTON_LABEL, exact=True).click()
        await self._wait_for_processing()

        # A leftover success alert would intercept the clicks below
        alert = self.page.locator(ALERT_COMPONENT)
        if await is_visible_within(alert, OPTIONAL_DIALOG_TIMEOUT_MS):
            await alert.get_by_role("button", name=CLOSE_BUTTON_LABEL).click()
            await expect(alert).to_be_hidden()

        if not await bottom_menu.is_visible():
            await menu_button.click()
            await expect(bottom_menu).to_be_visible()

        async with self.page.context.expect_page() as page_info:
            await self.page.locator(QR_CODE).click()
        test_page = await page_info.value
        logger.info("Opened test page: %s", test_page.url)
        return test_page
