from rich.pretty import pprint

from argot import *

__styles__ = {
    "program-name": "bold #22C55E",
}

app = App("proj", "manage projects").version("0.1.0").footer("environment: PROJ_TOKEN")
app.add_flag("v,verbose", "print more details")
app.add_option("token", "api token").env("PROJ_TOKEN")

create = app.add_subcommand("create", "create a project")
create.add_option("n,name", "project name").required().check(pattern(r"[a-z][a-z0-9-]*", "a lowercase slug"))
create.add_option("t,tag", "tag to attach (repeatable)").duplicate_policy(DuplicatePolicy.ACCUMULATE)
create.add_option("j,jobs", "parallel jobs").type(int).check(range_of(1, 64)).default_value(4)
create.add_positional("template", "template to start from").default_value("basic")

listing = app.add_subcommand("list", "list projects")
listing.add_flag("a,all", "include archived projects")
listing.add_option("format", "output format").check(choice(["table", "json"])).default_value("table")


if __name__ == '__main__':
    result = invoke(app, shell=True)
    if result is not None:
        pprint(dict(result.values()))
        pprint({"subcommand": result.subcommand(), "remaining": result.remaining_args()})
