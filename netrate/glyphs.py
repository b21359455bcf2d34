def surrogatepass(code):
    return code.encode('utf-16', 'surrogatepass').decode('utf-16')

# Throughput
cod_arrow_small_down = surrogatepass('\uea9d')
cod_arrow_small_up   = surrogatepass('\ueaa0')
icon_spacer          = '  '

# Alerts
md_alert       = surrogatepass('\udb80\udc26')
md_network_off = surrogatepass('\udb83\udc9b')

# Network
md_network = surrogatepass('\udb81\udef3')
