# Shortcut for the preview ui, moving imports into main invocation to prevent
# unnecessarily loading UI modules unless they're needed
if __name__ == '__main__':
    import sys
    from .ui import preview
    sys.exit(preview.run_preview(sys.argv[1] if len(sys.argv) > 1 else None))
