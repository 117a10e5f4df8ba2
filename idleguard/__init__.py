"""Keep the workstation awake by nudging the mouse cursor on a fixed interval."""
