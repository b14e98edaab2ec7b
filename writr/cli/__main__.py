from writr.cli import cli

cli(obj={})
