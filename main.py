from rich.pretty import pprint

from commander import Runner

runner = Runner()
runner.program("version", "1.0.0")
runner.program("description", "Demonstration program.")
runner.global_option("--verbose", "Talk more")


@runner.command("build", description="Build the project", syntax="build [options] SRC...")
def build(args, options):
    pprint({"args": args, "options": dict(options)})


build.option("-o", "--out FILE", "Write the result to FILE")
build.option("-j", "--jobs N", int, "Run N jobs in parallel")
runner.alias_command("b", "build", "--out", "a.out")


if __name__ == '__main__':
    runner.run()
