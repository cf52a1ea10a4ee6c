#!/usr/bin/env python3
"""simple-contacts - command-line access to the private contacts store.

Usage:
  simple-contacts contacts list                      # List private contacts
  simple-contacts contacts add --first Ada --phone 555-0100
  simple-contacts contacts star 1000001 1000002      # Mark as favorites
  simple-contacts groups create "Family"             # Create a group
  simple-contacts groups add Family 1000001          # Put contacts in a group
  simple-contacts config --init                      # Write an example config
"""

import argparse
import logging
import sys

from . import __version__


def _add_contact_fields(p: argparse.ArgumentParser) -> None:
    p.add_argument("--first", dest="first_name", help="First name")
    p.add_argument("--middle", dest="middle_name", help="Middle name")
    p.add_argument("--surname", "--last", dest="surname", help="Surname")
    p.add_argument("--phone", action="append", help="Phone number (repeatable, replaces all)")
    p.add_argument("--email", action="append", help="Email (repeatable, replaces all)")
    p.add_argument("--address", action="append", help="Postal address (repeatable, replaces all)")
    p.add_argument("--birthday", help="Birthday, YYYY-MM-DD")
    p.add_argument("--notes", help="Free-text notes")
    p.add_argument("--photo", metavar="PATH_OR_URL", help="Photo to store as thumbnail")
    p.add_argument("--star", action="store_true", help="Mark as favorite")


def _setup_logging(verbose: bool) -> None:
    from .config import get

    level = logging.DEBUG if verbose else getattr(logging, str(get("logging.level", "WARNING")).upper(), logging.WARNING)
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="simple-contacts",
        description="Private contacts and groups, stored locally",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
EXAMPLES:
  Contacts:
    simple-contacts contacts list --favorites
    simple-contacts contacts show 1000001
    simple-contacts contacts edit 1000001 --email ada@example.com
    simple-contacts contacts edit 1000001 --remove-photo

  Groups:
    simple-contacts groups list
    simple-contacts groups rename Family "Close family"
    simple-contacts groups remove Family 1000001

Run 'simple-contacts <command> --help' for detailed command help.
"""
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--db", metavar="PATH", help="Database file (default: storage.path from config)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")

    subparsers = parser.add_subparsers(dest="command", required=True)

    # contacts
    contacts_parser = subparsers.add_parser("contacts", help="Manage private contacts")
    contacts_sub = contacts_parser.add_subparsers(dest="contacts_command", required=True)
    c_list = contacts_sub.add_parser("list", help="List contacts")
    c_list.add_argument("--favorites", action="store_true", help="Only starred contacts")
    c_list.add_argument("--json", action="store_true", help="Output JSON")
    c_show = contacts_sub.add_parser("show", help="Show one contact")
    c_show.add_argument("id", type=int, help="Contact id")
    c_show.add_argument("--json", action="store_true", help="Output JSON")
    c_add = contacts_sub.add_parser("add", help="Add a contact")
    _add_contact_fields(c_add)
    c_edit = contacts_sub.add_parser("edit", help="Edit a contact (given fields are replaced)")
    c_edit.add_argument("id", type=int, help="Contact id")
    _add_contact_fields(c_edit)
    c_edit.add_argument("--remove-photo", action="store_true", help="Drop the stored photo")
    for name, help_text in (
        ("delete", "Delete contacts"),
        ("star", "Add contacts to favorites"),
        ("unstar", "Remove contacts from favorites"),
    ):
        p = contacts_sub.add_parser(name, help=help_text)
        p.add_argument("ids", type=int, nargs="+", help="Contact ids")

    # groups
    groups_parser = subparsers.add_parser("groups", help="Manage private groups")
    groups_sub = groups_parser.add_subparsers(dest="groups_command", required=True)
    g_list = groups_sub.add_parser("list", help="List groups with member counts")
    g_list.add_argument("--json", action="store_true", help="Output JSON")
    g_create = groups_sub.add_parser("create", help="Create a group")
    g_create.add_argument("title", help="Group title")
    g_rename = groups_sub.add_parser("rename", help="Rename a group")
    g_rename.add_argument("group", help="Group id or title")
    g_rename.add_argument("title", help="New title")
    g_delete = groups_sub.add_parser("delete", help="Delete a group (members are kept)")
    g_delete.add_argument("group", help="Group id or title")
    g_add = groups_sub.add_parser("add", help="Add contacts to a group")
    g_add.add_argument("group", help="Group id or title")
    g_add.add_argument("contact_ids", type=int, nargs="+", help="Contact ids")
    g_remove = groups_sub.add_parser("remove", help="Remove contacts from a group")
    g_remove.add_argument("group", help="Group id or title")
    g_remove.add_argument("contact_ids", type=int, nargs="+", help="Contact ids")

    # config
    config_parser = subparsers.add_parser(
        "config", help="Manage configuration",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
EXAMPLES:
  simple-contacts config                     # Show current config
  simple-contacts config --init              # Create config file with defaults
  simple-contacts config --path              # Show config file path

CONFIG FILE LOCATION:
  ~/.config/simple-contacts/config.yaml
"""
    )
    config_parser.add_argument("--init", action="store_true", help="Create config file with example settings")
    config_parser.add_argument("--path", action="store_true", help="Show config file path")
    config_parser.add_argument("--force", action="store_true", help="Overwrite existing config (with --init)")

    args = parser.parse_args(argv)
    _setup_logging(args.verbose)

    if args.command == "contacts":
        from .contacts_cmd import run
    elif args.command == "groups":
        from .groups_cmd import run
    elif args.command == "config":
        from .config import find_config_file, init_config, show_config
        if args.path:
            config_file = find_config_file()
            if config_file:
                print(config_file)
            else:
                print("(no config file - using defaults)")
            return 0
        elif args.init:
            try:
                path = init_config(force=args.force)
                print(f"✓ Created config file: {path}")
                print("  Edit it to customize settings.")
                return 0
            except FileExistsError as e:
                print(f"✗ {e}")
                print("  Use --force to overwrite.")
                return 1
        else:
            show_config()
            return 0
    else:
        parser.print_help()
        return 2

    return run(args)


if __name__ == "__main__":
    sys.exit(main())
