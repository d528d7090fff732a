"""Word lists used by the rule-based extractor and the template engine."""

ACTION_VERBS: frozenset[str] = frozenset({
    "analyse", "analyze", "answer", "brainstorm", "build", "calculate",
    "classify", "code", "compare", "compose", "convert", "create", "critique",
    "debug", "define", "describe", "design", "develop", "discuss", "draft",
    "edit", "elaborate", "estimate", "evaluate", "expand", "explain", "find",
    "fix", "generate", "give", "identify", "implement", "improve", "list",
    "make", "optimize", "organize", "outline", "paraphrase", "plan", "predict",
    "prepare", "produce", "proofread", "propose", "provide", "recommend",
    "refactor", "research", "review", "rewrite", "show", "simplify", "solve",
    "structure", "suggest", "summarise", "summarize", "teach", "tell", "test",
    "translate", "visualize", "write",
})

INTERROGATIVES: frozenset[str] = frozenset({
    "what", "why", "how", "who", "whom", "whose", "when", "where", "which",
})

AUXILIARIES: frozenset[str] = frozenset({
    "am", "are", "can", "could", "did", "do", "does", "has", "have", "is",
    "may", "might", "must", "shall", "should", "was", "were", "will", "would",
})

SUBJECT_WORDS: frozenset[str] = frozenset({
    "i", "you", "we", "they", "he", "she", "it", "there", "anyone",
    "someone", "somebody", "people", "this", "that", "these", "those",
})

POLITENESS: frozenset[str] = frozenset({"please", "kindly", "pls", "plz"})

FILLER_VERBS: frozenset[str] = frozenset({
    "want", "need", "like", "help", "let", "would", "wish", "try",
})

FORMAT_WORDS: frozenset[str] = frozenset({
    "article", "blog", "code", "email", "essay", "guide", "letter", "list",
    "newsletter", "outline", "paper", "poem", "post", "presentation",
    "proposal", "report", "script", "slides", "story", "summary", "tutorial",
})

LENGTH_WORDS: frozenset[str] = frozenset({
    "short", "brief", "long", "detailed", "quick", "comprehensive",
    "concise", "in-depth",
})

STOPWORDS: frozenset[str] = frozenset({
    "a", "about", "all", "an", "and", "any", "as", "at", "be", "been", "but",
    "by", "for", "from", "get", "good", "great", "i", "if", "in", "into",
    "is", "it", "its", "just", "me", "more", "my", "nice", "no", "not", "of",
    "on", "or", "our", "out", "really", "so", "some", "something", "stuff",
    "that", "the", "their", "them", "then", "there", "these", "they",
    "things", "this", "those", "to", "too", "up", "us", "very", "was", "we",
    "what", "with", "you", "your",
})

LEADING_FILLER: frozenset[str] = frozenset({
    "a", "an", "the", "some", "me", "us", "my", "our", "your", "them",
    "him", "her", "this", "that", "please",
})

TOPIC_PLACEHOLDERS: frozenset[str] = frozenset({
    "topic", "tbd", "todo", "n/a", "na", "none", "something", "anything",
    "the topic", "your topic", "...", "xxx",
})

TIME_WORDS: frozenset[str] = frozenset({
    "today", "tonight", "tomorrow", "yesterday", "lately", "recently",
    "currently", "nowadays", "soon", "ago", "last", "next", "week", "weeks",
    "month", "months", "year", "years", "weekend",
})
