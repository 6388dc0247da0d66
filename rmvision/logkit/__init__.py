"""Log levels with their colours, and options for naming log files."""