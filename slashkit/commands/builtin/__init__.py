"""Commands bundled with the bot; scanned by PackageCommandProvider."""
