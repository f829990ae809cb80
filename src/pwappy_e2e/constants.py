"""Constants for Pwappy E2E automation.

Single source of truth for timeouts, selectors and UI labels.
Tag names, title attributes and label strings are part of the editor's
interface and must match the UI exactly (labels are in Japanese).
"""

# Timeouts (milliseconds)
DEFAULT_NAVIGATION_TIMEOUT_MS = 30000
DEFAULT_ELEMENT_WAIT_TIMEOUT_MS = 15000
ALERT_WAIT_TIMEOUT_MS = 10000
COMPONENT_INSERT_TIMEOUT_MS = 10000
HTML_TAG_INSERT_TIMEOUT_MS = 5000
OPTIONAL_DIALOG_TIMEOUT_MS = 5000
SAVE_ALERT_TIMEOUT_MS = 8000
LOADING_OVERLAY_TIMEOUT_MS = 30000
APP_DELETE_TIMEOUT_MS = 90000
MOVING_HANDLE_TIMEOUT_MS = 10000
MOVING_HANDLE_POLL_MS = 1000
DRAG_SETTLE_MS = 500
LONG_SCENARIO_TIMEOUT_MS = 120000

# Timeouts (seconds)
SNAPSHOT_SETTLE_SECONDS = 0.5

# Identifier limits
APP_IDENTIFIER_MAX_LENGTH = 30
DEFAULT_APP_VERSION = "1.0.0"

# Auth cookie names
AUTH_COOKIE_NAME = "pwappy_auth"
IDENT_KEY_COOKIE_NAME = "pwappy_ident_key"
LOGIN_COOKIE_NAME = "pwappy_login"

# -----------------------------------------------------------------------------
# Dashboard
# -----------------------------------------------------------------------------
APP_LIST_HEADING = "アプリケーション一覧"
VERSION_HEADING = "バージョン管理"
PUBLISH_HEADING = "公開設定"
ADD_APP_TITLE = "アプリケーションの追加"
PROCESSING_TEXT = "処理中..."
SAVE_BUTTON_LABEL = "保存"
SELECT_BUTTON_LABEL = "選択"
DELETE_BUTTON_LABEL = "削除"
DELETE_CONFIRM_LABEL = "削除する"
EDITOR_BUTTON_LABEL = "エディタ"
UNPUBLISH_BUTTON_LABEL = "非公開"
UNPUBLISH_CONFIRM_LABEL = "非公開にする"
RESTORE_BUTTON_LABEL = "ワークベンチに復元"
RESTORE_CONFIRM_LABEL = "復元"
PUBLISHED_STATUS_TEXT = "公開中"

APP_MODAL = "dashboard-modal-window#appModal"
APP_NAME_INPUT = "#input-app-name"
APP_KEY_INPUT = "#input-app-key"
APP_LIST_ROWS = ".app-list tbody tr"
VERSION_LIST_ROWS = ".version-list tbody tr"
PUBLISH_LIST_ROWS = ".publish-list tbody tr"
DASHBOARD_LOADING_OVERLAY = "dashboard-main-content > dashboard-loading-overlay"
ANY_DASHBOARD_LOADING_OVERLAY = "dashboard-loading-overlay"
DELETE_CONFIRM_DIALOG = "message-box#delete-confirm"
PUBLISH_ACTION_CONFIRM_DIALOG = "message-box#publish-action-confirm"
RESTORE_CONFIRM_DIALOG = "message-box#restore-confirm"

# -----------------------------------------------------------------------------
# Editor
# -----------------------------------------------------------------------------
EDITOR_LOADING_OVERLAY = "app-container-loading-overlay"
EDITOR_PROCESSING_TEXT = "処理中"
EDITOR_ROOT = "ios-component"
ALERT_COMPONENT = "alert-component"
CLOSE_BUTTON_LABEL = "閉じる"

SNAPSHOT_RESTORE_TEXT = "前回正常に終了されなかった可能性"
SNAPSHOT_DISCARD_TEXT = "すべてのスナップショットを破棄しますか？"
SNAPSHOT_DISCARD_LABEL = "破棄する"
SNAPSHOT_DISCARD_CONFIRM_LABEL = "はい、破棄します"

# DOM tree / template panel
TEMPLATE_CONTAINER = "template-container"
DOM_TREE = "#dom-tree"
HAMBURGER_BUTTON = "template-container #hamburger"
CONTEXT_MENU = "#contextMenu"
ADD_PAGE_LABEL = "ページ追加"
PAGE_NODES = "#dom-tree > .node[data-node-type=\"page\"]"
APP_NODE = "#dom-tree > div[data-node-type=\"app\"]"
CONTENT_LABEL = "コンテンツ"
TOOL_BOX_ITEM = "tool-box-item"
HTML_TAG_TOOL = "HTML Tag"
HTML_TAG_PROMPT = "追加するタグ名を入れてください"
NODE_SELECTED_CLASS = "node-select"
NODE_ID_ATTRIBUTE = "data-node-id"
TOP_CONTAINER = ".top-container"
TOP_TEMPLATE_LIST = "#top-template-list"
TOP_TEMPLATE_ITEM = ".top-template-item"
TEMPLATE_SELECT = ".select"
TEMPLATE_TITLE_BAR = ".title-bar"
DRAG_STEPS = 20
LEFT_MOVING_HANDLE = "#leftMovingHandle"
RIGHT_MOVING_HANDLE = "#rightMovingHandle"

# Property panel
PROPERTY_CONTAINER = "property-container"
EDIT_ATTRIBUTES_TITLE = "属性を編集"
ATTRIBUTE_LIST = "#attributeList"
ATTRIBUTE_ITEM = "div.attribute-item"
ATTRIBUTE_EDIT_ICON = ".edit-icon"
ADD_TO_ELEMENT_LABEL = "要素に追加"
ADD_TO_TAG_LABEL = "タグに追加"
ATTRIBUTE_NAME_LABEL = "属性名:"
ATTRIBUTE_TEMPLATE_LABEL = "テンプレート:"
NO_HIGHLIGHT_BACKGROUND = "rgba(0, 0, 0, 0)"

# Script / event panel
SCRIPT_CONTAINER = "script-container"
EVENT_CONTAINER = "event-container"
SERVICE_WORKER_CONTAINER = "serviceworker-container"
SCRIPT_LIST_CONTAINER = "#script-list-container"
SCRIPT_EDITOR_CONTAINER = "#script-container"
SCRIPT_ADD_MENU = "#scriptAddMenu"
EVENT_SCRIPT_ADD_MENU = "event-container #scriptAddMenu"
SCRIPT_NAME_INPUT = "#script-name"
EVENT_ADD_SCRIPT_BUTTON = "#edit-add-script"
SCRIPT_ROW_ITEM = "div.editor-row-right-item"
SCRIPT_SAVE_FAB = "#fab-save"
ADD_SCRIPT_TITLE = "スクリプトの追加"
EDIT_SCRIPT_TITLE = "スクリプトの編集"
SAVE_SCRIPT_TITLE = "スクリプトの保存"
EDIT_EVENTS_BUTTON = "button#fab-edit[title=\"イベントを編集\"]"
EVENT_LIST_POPUP = "#eventList"
EVENT_EDIT_MENU = "#eventEditMenu"
EVENT_TARGET_INPUT = "input#event-target"
EVENT_NAME_INPUT = "input#event-name"
EVENT_COMMENT_INPUT = "input#comment-value"
ADD_BUTTON_LABEL = "追加"
SAVE_ICON_DIRTY_CLASS = "shake-save-button"

TAB_EVENTS = "イベント"
TAB_SCRIPTS = "スクリプト"
TAB_SERVICE_WORKER = "サービスワーカー"

SCRIPT_ERROR_MESSAGE = "スクリプトのエラーを修正してください"
SAVE_ERROR_MARKERS = ("エラー", "修正")

# Monaco code editor
MONACO_EDITOR = ".monaco-editor[role=\"code\"]"
MONACO_TEXTAREA = "textarea.inputarea"
MONACO_VIEW_LINES = ".view-lines"
MONACO_URI_ATTRIBUTE = "data-uri"
MONACO_TYPING_DELAY_MS = 10

# Preview / platform switcher
PREVIEW_FRAME = "#ios-container #renderzone"
PLATFORM_SWITCHER = "platform-switcher"
PLATFORM_MENU_TOGGLE = ".screen-rotete-container"
PLATFORM_EDIT_MENU = "#platformEditMenu"
RUN_MODE_LABEL = "動作"
ALERT_DIALOG = "ons-alert-dialog"
ALERT_DIALOG_BUTTON = "ons-alert-dialog-button"

# Bottom menu / test page
BOTTOM_MENU_BUTTON = "#fab-bottom-menu-box"
BOTTOM_MENU = "#platformBottomMenu"
QR_CODE = "#qrcode"
MAIN_SCRIPT_SELECTOR = "script[src*=\"main.js\"]"

# Selector templates (str.format)
EVENT_ROW_TEMPLATE = "div.editor-row:has(div.label:text-is(\"{event_name}\"))"
CHILD_NODE_TEMPLATE = ":scope > .node[data-node-type=\"{node_type}\"]"
NODE_BY_ATTRIBUTE_TEMPLATE = "div[{attribute}=\"{value}\"]"
TOP_TEMPLATE_ITEM_TEMPLATE = "div.top-template-item[data-template-id=\"{template_id}\"]"
SCRIPT_TYPE_RADIO_TEMPLATE = "input[type=\"radio\"][value=\"{script_type}\"]"
PROPERTY_INPUT_TEMPLATE = "[data-attribute-type=\"{name}\"], {name}"

# Shared editor fragments
MESSAGE_BOX = "message-box"
EDITOR_ROW = ".editor-row"
SCRIPT_ROW_LEFT = ".editor-row-left"
ROW_COMMENT = ".comment"
TAB = ".tab"
DOM_NODE = "div.node"
