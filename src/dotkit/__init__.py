"""
dotkit - convention-based script dispatcher for dotfiles

User scripts are organized in context directories and exposed as
`dot <context> <script> [args...]`. A personal dotfiles tree overlays the
bundled tree: same-named scripts shadow built-ins, new contexts extend them.

Example usage:
    from dotkit.config import load_config
    from dotkit.core import Found, list_contexts, resolve

    config = load_config()
    print(list_contexts(config))

    resolution = resolve(config, "git", "status")
    if isinstance(resolution, Found):
        print(resolution.path)
"""

__version__ = "0.1.0"
