"""Character table: voice ids and canned fallback scripts per caller type.

Scripts are spoken lines interleaved with ``[Pause Ns]`` markers that the
client uses for playback timing. They are constants; nothing here is mutated
after import.
"""

from enum import Enum
from types import MappingProxyType


class CategoryKey(str, Enum):
    """Known caller categories."""
    MOM = "mom"
    DAD = "dad"
    FRIEND = "friend"


DEFAULT_VOICE_KEY = CategoryKey.MOM
DEFAULT_SCRIPT_KEY = CategoryKey.FRIEND

# ElevenLabs voice ids
VOICES = MappingProxyType({
    CategoryKey.MOM: "Itr6exdQTrvjpW1lNztS",
    CategoryKey.DAD: "cjVigY5qzO86Huf0OWal",
    CategoryKey.FRIEND: "OmCmWje54WoEq3eEzDu6",
})

_MOM_SCRIPT = """
Hi honey, I just wanted to call and see how your week is going so far. [Pause 2s]

Oh, good, I'm glad to hear that. You sound well rested. [Pause 3s]

Really? That's exciting! Tell me a little bit about what you're working on. [Pause 4s]

Wow, that sounds like a lot of hard work. Just remember not to overdo it, okay? [Pause 2s]

Yes, you know me. I worry! Are you making sure to eat a proper lunch every day? [Pause 3s]

That's fine, just make sure you're not skipping meals. You need your energy. [Pause 3s]

Anyway, I just wanted to hear your voice for a few minutes. I miss you! [Pause 2s]

Okay, I'll let you go back to what you were doing. Call me later in the week when you have a bit more time.[Pause 3s]

Love you! Take care of yourself. Bye for now.
"""

_DAD_SCRIPT = """
Hey, honey. Just checking in. Everything okay on your end?

[Pause 3s]

That’s good. No, nothing’s wrong. I was just having a quick break and thought I'd call.

[Pause 4s]

Oh, the weather here is pretty typical. A little breezy, but the sun is out.

[Pause 1s]

So, did you figure out what time you were thinking of coming home next week?

[Pause 5s]

Okay, just let me know when you book it, so I can plan to pick you up.

[Pause 2s]

We’re good on groceries, thanks for asking. Your mother made that chili you like last night. There might be some leftovers.

[Pause 3s]

Oh, hey, did you remember to check on that car insurance thing we talked about? The payment is due soon, I think.

[Pause 4s]

Great. That’s all I needed to know. Just wanted to make sure it was on your radar.

[Pause 2s]

No, no rush on the details. Just whenever you get a minute.

[Pause 5s]

Alright. Well, I’ve gotta get back to this email. You take care, okay? And don't forget to eat something decent.

[Pause 1s]

Love you. Talk soon. Bye.
"""

_FRIEND_SCRIPT = """
Hey! Yeah, it's me. What are you doing?

[Pause 2s]

Oh, nice. I was just about to head out, but I wanted to see if you were busy later.

[Pause 3s]

That's too bad. Well, I had a pretty weird thing happen this morning, actually.

[Pause 1s]

Seriously. So, I went to that coffee shop near the park, right? The one with the blue awning?

[Pause 4s]

Exactly! Anyway, I'm waiting for my order, and this guy comes in and he's wearing... you are not going to believe this... a full-on knight costume.

[Pause 2s]

No, not like a Halloween thing! It was shiny! It looked real!

[Pause 5s]

I know! And he didn't order anything. He just stood there for a minute, adjusted his helmet, and walked out.

[Pause 1s]

Yeah, exactly. Just another Tuesday, I guess.

[Pause 3s]

Right? Anyway, I was thinking we could try that new place downtown tomorrow night, if you're free then?

[Pause 6s]

Perfect. I'll text you the time. Okay, gotta run. Talk to you later!

[Pause 2s]

You too! Bye!
"""

FALLBACK_SCRIPTS = MappingProxyType({
    CategoryKey.MOM: _MOM_SCRIPT,
    CategoryKey.DAD: _DAD_SCRIPT,
    CategoryKey.FRIEND: _FRIEND_SCRIPT,
})


def match_category(description: str | None) -> CategoryKey:
    """Pick the category a free-text description refers to.

    Case-insensitive substring match, checked in the order mom, dad; anything
    else (including an empty description) is a friend.
    """
    lowered = (description or "").lower()
    if CategoryKey.MOM.value in lowered:
        return CategoryKey.MOM
    if CategoryKey.DAD.value in lowered:
        return CategoryKey.DAD
    return DEFAULT_SCRIPT_KEY


def get_fallback_script(description: str | None) -> str:
    """Return the canned script closest to the requested conversation type."""
    return FALLBACK_SCRIPTS[match_category(description)]


def resolve_voice_id(character: str | None) -> str:
    """Map a character name to a voice id, defaulting to the mom voice."""
    key = (character or "").lower()
    try:
        return VOICES[CategoryKey(key)]
    except ValueError:
        return VOICES[DEFAULT_VOICE_KEY]
