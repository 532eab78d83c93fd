import click
from flask import Flask, jsonify, request
from flask_cors import CORS

from recognizer.earley import EarleyEngine
from recognizer.errors import GrammarError
from recognizer.generator import generate_strings
from recognizer.log import configure_logging
from recognizer.rule_parser import parse_grammar, split_puzzle_input

app = Flask(__name__)
app.config.update(
    MAX_INPUT_LENGTH=2000,
    GENERATE_COUNT=10,
    GENERATE_MAX_DEPTH=15,
)
app.config.from_prefixed_env("RECOGNIZER")
CORS(app)
configure_logging()

# Global stored grammar state
GLOBAL_GRAMMAR = None
GLOBAL_ENGINE = None


def _too_long(s: str) -> bool:
    return len(s) > app.config["MAX_INPUT_LENGTH"]


# =====================================================================
#  HOME PAGE
# =====================================================================
@app.route("/")
def index():
    return jsonify({
        "service": "cfg-recognizer",
        "endpoints": ["/set_grammar", "/validate", "/validate_batch", "/generate", "/ping"],
    })


# =====================================================================
#  1. SET GRAMMAR
# =====================================================================
@app.route("/set_grammar", methods=["POST"])
def set_grammar():
    global GLOBAL_GRAMMAR, GLOBAL_ENGINE

    data = request.get_json(silent=True) or {}
    text = data.get("grammar", "")
    if not isinstance(text, str) or not text.strip():
        return jsonify({"success": False, "message": "Grammar Error: no rules given."})

    try:
        grammar = parse_grammar(text)
        engine = EarleyEngine(grammar)
    except GrammarError as e:
        app.logger.info("rejected grammar: %s", e)
        return jsonify({
            "success": False,
            "message": f"Grammar Error: {str(e)}"
        })

    GLOBAL_GRAMMAR = grammar
    GLOBAL_ENGINE = engine
    app.logger.info("grammar set: %r", grammar)

    return jsonify({
        "success": True,
        "message": "Grammar successfully parsed.",
        "rules": {str(k): v for k, v in grammar.to_dict().items()}
    })


# =====================================================================
#  2. GENERATE STRINGS
# =====================================================================
@app.route("/generate", methods=["POST"])
def generate():
    if GLOBAL_GRAMMAR is None:
        return jsonify({"success": False, "message": "Grammar is not set."})

    generated = generate_strings(
        GLOBAL_GRAMMAR,
        max_strings=app.config["GENERATE_COUNT"],
        max_depth=app.config["GENERATE_MAX_DEPTH"],
    )
    return jsonify({"success": True, "generated": sorted(generated)})


# =====================================================================
#  3. VALIDATION
# =====================================================================
@app.route("/validate", methods=["POST"])
def validate():
    if GLOBAL_ENGINE is None:
        return jsonify({
            "success": False,
            "message": "Please set a grammar first."
        })

    data = request.get_json(silent=True) or {}
    input_str = data.get("string", "")
    if not isinstance(input_str, str):
        return jsonify({"success": False, "message": "'string' must be a string."})
    input_str = input_str.strip()
    if _too_long(input_str):
        return jsonify({"success": False, "message": "Input is too long."})

    accepted = GLOBAL_ENGINE.accepts(input_str)
    return jsonify({
        "success": True,
        "valid": accepted,
        "message": "String is derivable." if accepted else "String is NOT derivable."
    })


@app.route("/validate_batch", methods=["POST"])
def validate_batch():
    if GLOBAL_ENGINE is None:
        return jsonify({
            "success": False,
            "message": "Please set a grammar first."
        })

    data = request.get_json(silent=True) or {}
    strings = data.get("strings", [])
    if not isinstance(strings, list) or not all(isinstance(s, str) for s in strings):
        return jsonify({"success": False, "message": "'strings' must be a list of strings."})
    strings = [s.strip() for s in strings]
    if any(_too_long(s) for s in strings):
        return jsonify({"success": False, "message": "Input is too long."})

    results = [GLOBAL_ENGINE.accepts(s) for s in strings]
    return jsonify({
        "success": True,
        "results": results,
        "matches": sum(results)
    })


# =====================================================================
#  HEALTH CHECK
# =====================================================================
@app.route("/ping")
def ping():
    return jsonify({"status": "OK", "message": "Server running"})


# =====================================================================
#  CLI
# =====================================================================
@app.cli.command("check")
@click.argument("puzzle", type=click.File("r"))
@click.option("--verbose", "-v", is_flag=True, help="Print every message with its result.")
def check(puzzle, verbose):
    """Count the messages in PUZZLE that the rules above them accept."""
    rules_text, messages = split_puzzle_input(puzzle.read())
    try:
        engine = EarleyEngine(parse_grammar(rules_text))
    except GrammarError as e:
        raise click.ClickException(f"Grammar Error: {e}") from e

    matches = 0
    for message in messages:
        accepted = engine.accepts(message)
        matches += accepted
        if verbose:
            click.echo(f"{message}: {'yes' if accepted else 'no'}")
    click.echo(matches)


# =====================================================================
#  RUN
# =====================================================================
if __name__ == "__main__":
    app.run(debug=app.config.get("DEBUG", False))
