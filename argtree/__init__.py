
from argtree.parser import (Keyword,
                            Argument,
                            Parser,
                            normalize_option_key,
                            FLAG,
                            OPTIONAL,
                            MANDATORY,
                            POSITIONAL,
                            SUBCOMMAND)

from argtree.errors import (ArgTreeException,
                            DuplicateKeyword,
                            ConflictingKeyword,
                            SubcommandNotFound,
                            UnknownKeyword,
                            ValueConversionError,
                            ArgumentParseError,
                            UnknownArguments,
                            MissingPositional,
                            MissingPositionals,
                            MissingMandatory,
                            MissingValue)

from argtree.params import (IntParam, ChoicesParam,
                            INT8, INT16, INT32, INT64,
                            UINT8, UINT16, UINT32, UINT64)
from argtree.utils import convert_value
from argtree.command import Command, CommandLineError
from argtree.helpers import HelpHandler
