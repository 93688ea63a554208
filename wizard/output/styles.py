class Style:
    regular = 'default'
    info = 'bold cyan'
    good = 'green'
    bad = 'red'
    suspicious = 'yellow'
    label = 'cyan'
    error = 'bold red'


LABEL_PALETTE = (
    'cyan',
    'yellow',
    'green',
    'magenta',
    'blue',
    'bright_cyan',
    'bright_yellow',
    'bright_green',
    'bright_magenta',
    'bright_blue',
)
