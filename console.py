from colorama import init, Fore, Style

# Initialize colorama
init(autoreset=True)

LEVEL_COLORS = {
    'SUCCESS': Fore.GREEN,
    'ERROR': Fore.RED,
    'WARN': Fore.YELLOW,
    'INFO': Fore.BLUE,
}


class Console:
    """Colored diagnostic output for a sitemap run.

    Every message is also kept in ``messages`` so callers can look at what
    was reported once the run is over.
    """

    def __init__(self, quiet=False):
        self.quiet = quiet
        self.messages = []  # List of (level, msg)

    def log(self, level, msg):
        self.messages.append((level, msg))
        if self.quiet:
            return
        color = LEVEL_COLORS.get(level, '')
        print(f"{color}[{level}]{Style.RESET_ALL} {msg}")

    def info(self, msg):
        self.log('INFO', msg)

    def success(self, msg):
        self.log('SUCCESS', msg)

    def warn(self, msg):
        self.log('WARN', msg)

    def error(self, msg):
        self.log('ERROR', msg)

    @property
    def warnings(self):
        return [msg for level, msg in self.messages if level == 'WARN']

    @property
    def errors(self):
        return [msg for level, msg in self.messages if level == 'ERROR']
