"""Terminal interactive-fiction player.

Story markup is parsed into events (`adventure.parser`) and played back by a
tick-driven engine (`adventure.engine`); the curses shell lives in
`adventure.terminal`.
"""
