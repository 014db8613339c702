from mp3_to_opus.cli import app

app(prog_name="mp3-to-opus")
