"""keygate - license key issuing and activation service"""
