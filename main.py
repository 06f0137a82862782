import sys

from rich.console import Console
from rich.pretty import pprint

from progopts import *

console = Console(highlight=False, markup=False)


class PortParameter(UInt32Parameter):
    """port number between 1024 and 65535"""
    name = "port number"

    def check(self, number, /):
        if not 1024 <= number <= 65535:
            raise ValueError("number out of range (port number must be between 1024 and 65535)")


def main(argv):
    options = ProgramOptions(
        argv[0],
        "Usage: #progname# [<options>] <database-directory>",
        "For more information use:",
    )

    # global (unnamed) section
    options.add_section(Section("", "Global options description goes here", "global options"))
    options.add_option("--quiet,-q", "tell the server to be quiet", BooleanParameter())
    options.add_option("--no-server", "don't start server at all", BooleanParameter())
    options.add_option("--configuration,-c", "parse configuration file", configuration := StringParameter())
    options.add_option("--version", "prints version information", ObsoleteParameter())

    # "server" options section
    options.add_section("server", "Server options description goes here")
    options.add_option("--server.endpoints,-e", "server endpoints",
                       VectorParameter(StringParameter, ("tcp://127.0.0.1:80", "ssl://192.168.0.1:443")))
    options.add_option("--server.ports", "the server ports", VectorParameter(PortParameter, (8529, 16384)))
    options.add_option("--server.int32-value", "an int32 value", Int32Parameter(1))
    options.add_option("--server.uint32-value", "a uint32 value", UInt32Parameter(0))
    options.add_option("--server.bounded-value", "a bounded uint32 value",
                       BoundedParameter(UInt32Parameter(99), 42, 8193))

    # "database" options section
    options.add_section("database", "Database options description goes here")
    options.add_option("--database.journal-size", "maximal journal size", UInt32Parameter(16 * 1024 * 1024))
    options.add_option("--database.wait-for-sync", "wait for sync description", BooleanParameter(required=True))

    # hidden section
    options.add_hidden_section("debugging", "Debugging options description goes here")
    options.add_option("--debugging.crash-me", "whatever (option can still be used but it is not shown)",
                       BooleanParameter())
    options.add_obsolete_option("--debugging.not-used-anymore", "whatever (obsolete)")

    # obsolete section (all options in this section do nothing)
    options.add_obsolete_section("y2kbug")

    options.seal()

    parser = ArgumentParser(options)
    if section := parser.help_section(argv):
        options.print_help(section)
        return 0

    console.print("Parsing command-line options...\n")
    if not parser.parse(argv):
        return 1

    if options.processing_result.touched("version"):
        console.print("Version: 0.01\n")
        return 0

    if configuration.value:
        console.print("Parsing config file '%s'...\n" % configuration.value)
        if not IniFileParser(options).parse(configuration.value):
            return 1

    console.print("Options parsed successfully\n")

    positionals = options.processing_result.positionals
    console.print("Positional arguments (%d):" % len(positionals))
    for positional in positionals:
        console.print("- positional: '%s'" % positional)
    console.print()

    console.print("Touched options:")
    options.walk(lambda section, option: pprint(option), only_touched=True)
    return 0


if __name__ == '__main__':
    sys.exit(main(sys.argv))
