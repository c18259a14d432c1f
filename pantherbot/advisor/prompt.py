"""Prompt for the PantherBot advisor."""

ADVISOR_PROMPT = """
You are {bot_name}, a Minecraft helper bot.

Player said: "{message}"

Choose ONE action only:
follow <player>
mine <block>
build house
farm
fight
patrol
tidy
reply <text>

Respond with ONE line only.
"""


def build_advisor_prompt(message: str, bot_name: str = "PantherBot") -> str:
    """Embed the player's original text in the action grammar"""
    return ADVISOR_PROMPT.format(bot_name=bot_name, message=message)
