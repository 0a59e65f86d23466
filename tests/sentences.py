"""Sample TK102 sentences shared by the test suites.

All three carry a checksum that validates.
"""

# Amsterdam, stationary, full signal, active fix.
SAMPLE = (
    "1203292316,0031698765432,GPRMC,211657.000,A,5213.0247,N,00516.7757,E,"
    "0.00,273.30,290312,,,A*62,F,imei:123456789012345,123"
)

# Sydney-ish coordinates, moving at 12 knots, low signal, invalid fix.
SOUTH_WEST = (
    "2411010830,0031600000000,GPRMC,083015.250,V,3356.1230,S,15112.4560,W,"
    "12.00,45.90,011124,,,A*70,L,imei:359710048216253,456"
)

# Munich, moving at 5.5 knots heading east.
MUNICH = (
    "2406151045,0031611111111,GPRMC,104500.000,A,4807.0380,N,01131.0000,E,"
    "5.50,90.00,150624,,,A*51,F,imei:123456789012345,789"
)
