"""Framework-independent plugin logic for a group-chat bot: reminder timers, greetings, poems, MIDI, galleries and web lookups."""

__version__ = "0.1.0"