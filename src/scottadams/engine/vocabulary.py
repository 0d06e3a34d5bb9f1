"""Turn a line of player input into (verb, noun) vocabulary ids.

Only the first word_length characters of a word are significant. A word
marked with a leading * is a synonym and resolves to the id of the nearest
non-synonym entry before it.
"""

from dataclasses import dataclass

from .world import DIRECTIONS, Word, World

VERB_GO = 1
VERB_CARRY = 10
VERB_DROP = 18


@dataclass(frozen=True)
class ParsedCommand:
    """Vocabulary ids for a line of input, plus the words as typed."""

    verb: int
    noun: int
    verb_text: str
    noun_text: str

    @property
    def has_unknown_words(self) -> bool:
        if self.verb in (VERB_CARRY, VERB_DROP):
            return False
        return self.verb < 1 or (bool(self.noun_text) and self.noun < 1)


def tokenize(line: str) -> list[str]:
    """Split on single spaces after trimming leading spaces."""
    return line.lstrip(" ").split(" ")


def match_word(words: list[Word], token: str, word_length: int) -> int:
    """Return the canonical id of the vocabulary entry for a token, or 0.

    An entry matches exactly when both sides agree on their first
    word_length characters. Failing that, a shorter token matches the first
    entry it abbreviates.
    """
    if not token:
        return 0
    typed = token.upper()[:word_length]
    for word in words:
        if word.bare_text.upper()[:word_length] == typed:
            return word.canonical
    for word in words:
        if word.bare_text.upper()[: len(typed)] == typed:
            return word.canonical
    return 0


def resolve_go_shortcut(world: World, tokens: list[str], viable_verbs: set[int]) -> list[str]:
    """Rewrite a bare direction like "n" as "go north".

    Left alone when the typed verb starts with a verb that has an action
    ready to run, so the game can still use such words itself.
    """
    entered = tokens[0].lower()
    if not entered:
        return tokens

    for verb in viable_verbs:
        possible = world.verbs[verb].bare_text.lower()
        if possible and entered.startswith(possible):
            return tokens

    for direction in range(1, len(DIRECTIONS) + 1):
        if direction >= len(world.nouns):
            break
        direction_text = world.nouns[direction].bare_text.lower()
        if direction_text.startswith(entered):
            return [world.verbs[VERB_GO].bare_text.lower(), direction_text]
    return tokens


def parse_command(world: World, line: str, viable_verbs: set[int]) -> ParsedCommand:
    """Match an input line against the vocabulary."""
    tokens = tokenize(line)
    if len(world.verbs) > VERB_GO:
        tokens = resolve_go_shortcut(world, tokens, viable_verbs)
    if len(tokens) < 2:
        tokens.append("")

    word_length = world.header.word_length
    return ParsedCommand(
        verb=match_word(world.verbs, tokens[0], word_length),
        noun=match_word(world.nouns, tokens[1], word_length),
        verb_text=tokens[0],
        noun_text=tokens[1],
    )
