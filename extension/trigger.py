from bs4 import Tag

from .dom import ObservedDocument

TRIGGER_CLASS = "ai-reply-button"
TRIGGER_SELECTOR = f".{TRIGGER_CLASS}"
# toolbar button styling of the host webmail
HOST_BUTTON_CLASSES = "T-I J-J5-Ji aoO v7 T-I-atl L3"

RESTING_LABEL = "AI Reply"
BUSY_LABEL = "Generating..."


def create_trigger(document: ObservedDocument) -> Tag:
    return document.new_tag(
        "div",
        attrs={
            "class": HOST_BUTTON_CLASSES.split() + [TRIGGER_CLASS],
            "style": "margin-right: 8px",
            "role": "button",
            "data-tooltip": "Generate AI Reply",
        },
        text=RESTING_LABEL,
    )


def set_busy(trigger: Tag) -> None:
    trigger.string = BUSY_LABEL
    trigger["disabled"] = ""
    trigger["aria-disabled"] = "true"


def set_resting(trigger: Tag) -> None:
    trigger.string = RESTING_LABEL
    for attr in ("disabled", "aria-disabled"):
        if attr in trigger.attrs:
            del trigger[attr]


def is_disabled(trigger: Tag) -> bool:
    return trigger.has_attr("disabled")
