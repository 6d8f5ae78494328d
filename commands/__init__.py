# ═══════════════════════════════════════════════════════════════════
# commands/__init__.py - Shared configuration for command modules
# ═══════════════════════════════════════════════════════════════════

# Global reference that all command modules can access
cfg = None

def set_globals(config):
    """Set global references for all command modules"""
    global cfg

    cfg = config

    # Set the globals in each module
    import commands.analysis_commands
    import commands.config_commands

    commands.analysis_commands.cfg = cfg
    commands.config_commands.cfg = cfg
